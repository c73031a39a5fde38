# SPDX-License-Identifier: GPL-3.0-or-later

import argparse
import logging
import os
import sys
from typing import List, Optional

import mirror.config
import mirror.git
from mirror import MirrorError, __version__
from mirror.log import setup_logging
from mirror.paths import group_dir, validate_mirror_root, validate_name

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAIL = 1
EXIT_SYNC_FAILED = 2


class UsageError(MirrorError):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def _parser() -> _ArgumentParser:
    # Short options only, just like getopts
    parser = _ArgumentParser(prog='git-sync', allow_abbrev=False,
                             description=f"Clone or pull a list of git repositories "
                                         f"into a local mirror (v{__version__})")
    parser.add_argument('-m', dest='mirror_tld', metavar='mirror_top-level_directory',
                        default=os.getcwd(),
                        help="Mirror top-level directory. Only absolute (full) paths "
                             "are accepted! (default: current directory)")
    parser.add_argument('-r', dest='repo_name', metavar='repository_name', required=True,
                        help="The repo name to sync (letters, digits, '_' and '-')")
    parser.add_argument('-c', dest='config_file', metavar='config_file', required=True,
                        help="The config file listing the git repository URLs to mirror")
    parser.add_argument('-d', dest='dry_run', action='store_true',
                        help="Dry-run mode. Only log what would be cloned or pulled")
    parser.add_argument('-s', dest='strict', action='store_true',
                        help="Exit with status 2 if any repository failed to sync")
    return parser


def _fail_usage(parser: argparse.ArgumentParser, message: str) -> int:
    setup_logging()
    parser.print_usage(sys.stderr)
    log.critical(message)
    return EXIT_FAIL


def main(argv: Optional[List[str]] = None) -> int:
    parser = _parser()
    if argv is None:
        argv = sys.argv[1:]

    # Required tools are checked before anything else, -h works without them
    if '-h' not in argv:
        try:
            mirror.git.check_dependencies()
        except MirrorError as e:
            setup_logging()
            log.critical(str(e))
            return EXIT_FAIL

    if not argv:
        return _fail_usage(parser, f"{parser.prog} has mandatory parameters; "
                                   "review usage message and try again.")
    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        return _fail_usage(parser, f"Invalid parameters passed to \"{parser.prog}\" ({e}); "
                                   "exiting. See usage above.")

    setup_logging(dry_run=args.dry_run)

    try:
        repo_name = validate_name(args.repo_name)
        mirror_tld = validate_mirror_root(args.mirror_tld)
        repos = mirror.config.load_repos(args.config_file)
    except MirrorError as e:
        log.critical(str(e))
        return EXIT_FAIL

    log.info(f"Starting {parser.prog} for repo ({repo_name})...")

    group = group_dir(mirror_tld, repo_name)
    log.info(f"Creating/validating directory structure for mirror and repo ({repo_name})...")
    if not args.dry_run:
        try:
            os.makedirs(group, exist_ok=True)
        except OSError as e:
            log.critical(f"Unable to create directory ({group}); check permissions. ({e.strerror})")
            return EXIT_FAIL

    outcomes = mirror.git.sync(mirror_tld, repo_name, repos, dry_run=args.dry_run)

    if args.strict and any(not o.ok for o in outcomes):
        return EXIT_SYNC_FAILED
    return EXIT_OK

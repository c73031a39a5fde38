# SPDX-License-Identifier: GPL-3.0-or-later

import logging
import os.path
import shutil
import subprocess
from typing import List, Sequence

from mirror import InvalidName, MissingDependency, Outcome, Repo
from mirror.paths import ValidatedName, target_path

log = logging.getLogger(__name__)

_GIT = 'git'


def check_dependencies():
    if not shutil.which(_GIT):
        raise MissingDependency(f"Dependency ({_GIT}) missing!")


def _git(args: List[str], cwd: str) -> str:
    # Output is captured so it ends up in the log instead of interleaving
    # with it; stderr is merged since git reports progress and errors there.
    p = subprocess.run([_GIT] + args, cwd=cwd, check=True,
                       stdout=subprocess.PIPE, stderr=subprocess.STDOUT,
                       universal_newlines=True)  # text
    return p.stdout


def _run(outcome: Outcome, args: List[str], cwd: str, dry_run: bool) -> Outcome:
    if dry_run:
        return outcome

    try:
        output = _git(args, cwd)
    except subprocess.CalledProcessError as e:
        outcome.ok = False
        outcome.error = (e.output or '').strip() or f"git exited with status {e.returncode}"
        log.warning(f"Failed to {outcome.action} {outcome.repo.display_url}: {outcome.error}")
        return outcome
    except OSError as e:
        outcome.ok = False
        outcome.error = str(e)
        log.warning(f"Failed to {outcome.action} {outcome.repo.display_url}: {outcome.error}")
        return outcome

    output = output.strip()
    if output:
        log.debug(output)
    return outcome


def sync_repo(mirror_root: str, repo_name: ValidatedName, r: Repo,
              dry_run: bool = False) -> Outcome:
    try:
        repo_dir = target_path(mirror_root, repo_name, r.url)
    except InvalidName as e:
        log.warning(str(e))
        return Outcome(r, 'clone', None, ok=False, error=str(e))

    group, name = os.path.split(repo_dir)
    if os.path.isdir(repo_dir):
        log.info(f"Pulling any updates from repo: {r.display_url}...")
        return _run(Outcome(r, 'update', repo_dir, ok=True),
                    ['pull'], repo_dir, dry_run)

    log.info(f"New repo detected, cloning repo: {r.display_url}...")
    # Pass the directory explicitly, git's own guess may differ from ours
    return _run(Outcome(r, 'clone', repo_dir, ok=True),
                ['clone', r.url, name], group, dry_run)


def sync(mirror_root: str, repo_name: ValidatedName, repos: Sequence[Repo],
         dry_run: bool = False) -> List[Outcome]:
    # One repository at a time, in config order. A failure is recorded
    # and the remaining repositories are still synced.
    outcomes = [sync_repo(mirror_root, repo_name, r, dry_run) for r in repos]

    failed = [o for o in outcomes if not o.ok]
    if failed:
        log.warning(f"Synced {len(outcomes)} repositories ({len(failed)} failed): "
                    + ', '.join(o.repo.display_url for o in failed))
    else:
        log.info(f"Synced {len(outcomes)} repositories (0 failed)")
    return outcomes

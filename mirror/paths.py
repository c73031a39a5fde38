# SPDX-License-Identifier: GPL-3.0-or-later

import os.path
import re

from urllib3.exceptions import LocationParseError
from urllib3.util import parse_url

from mirror import InvalidMirrorRoot, InvalidName

_NAME_RE = re.compile(r'[A-Za-z0-9_-]+')
_GIT_SUFFIX = '.git'


class ValidatedName(str):
    """Repository group name that passed validate_name()."""


def validate_name(value: str) -> ValidatedName:
    if not value or not _NAME_RE.fullmatch(value):
        raise InvalidName(f"Invalid repository name ({value!r}); "
                          "only letters, digits, '_' and '-' are allowed")
    return ValidatedName(value)


def validate_mirror_root(value: str) -> str:
    if not value.startswith('/'):
        raise InvalidMirrorRoot(f"Absolute paths only, please ({value})")

    # Drop trailing '/' for uniformity, this also rejects '/' itself
    root = value.rstrip('/')
    if not root:
        raise InvalidMirrorRoot("Please set the desired location of the local mirror")
    if not os.path.isdir(root):
        raise InvalidMirrorRoot(f"Mirror top-level directory ({root}) does not exist!")
    return root


def _url_path(url: str) -> str:
    # The raw path: no percent-encoding, no dot segment resolution
    url = url.split('#', 1)[0].split('?', 1)[0]
    if '://' not in url:
        return url
    try:
        # Reject URLs whose authority (host, port) does not parse
        parse_url(url)
    except LocationParseError as e:
        raise InvalidName(f"Cannot parse repository URL {url!r}: {e}") from e
    authority_and_path = url.split('://', 1)[1]
    return authority_and_path.partition('/')[2]


def repo_dir_name(url: str) -> str:
    path = _url_path(url).rstrip('/')
    name = path.rsplit('/', 1)[-1]
    if '/' not in path and ':' in name:
        # scp-like syntax: git@host:foo.git
        name = name.rsplit(':', 1)[-1]
    if name.endswith(_GIT_SUFFIX):
        name = name[:-len(_GIT_SUFFIX)]

    if name in ('', '.', '..'):
        raise InvalidName(f"Cannot derive a directory name from {url!r}")
    return name


def group_dir(mirror_root: str, repo_name: ValidatedName) -> str:
    return os.path.join(mirror_root, repo_name)


def target_path(mirror_root: str, repo_name: ValidatedName, url: str) -> str:
    return os.path.join(group_dir(mirror_root, repo_name), repo_dir_name(url))

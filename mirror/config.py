# SPDX-License-Identifier: GPL-3.0-or-later

import logging
from typing import List

from mirror import ConfigError, Repo

log = logging.getLogger(__name__)


def load_repos(path: str) -> List[Repo]:
    """
    Read the list of repositories to mirror.

    The file is split on any whitespace, so every token is one repository URL
    (two URLs on one line are two entries). Order is preserved and duplicates
    are kept.
    """
    try:
        with open(path, encoding='utf-8') as f:
            content = f.read()
    except OSError as e:
        raise ConfigError(f"Unable to read config file ({path}): {e.strerror}") from e

    repos = [Repo(token) for token in content.split()]
    if not repos:
        log.warning(f"No repositories listed in config file ({path})")
    return repos

from __future__ import annotations

import logging
from typing import Optional

from .host import Host

logger = logging.getLogger(__name__)


def git_config_get(host: Host, key: str, *, scope: Optional[str] = "global") -> Optional[str]:
    """Return the configured value, or None when the key is unset.

    scope=None asks git for the effective value across all scopes.
    """

    argv = ["git", "config"]
    if scope:
        argv.append(f"--{scope}")
    argv += ["--get", key]
    r = host.run(argv, check=False, read_only=True)
    if r.returncode != 0:
        return None
    return r.stdout.strip() or None


def git_config_set(host: Host, key: str, value: str) -> None:
    host.run(["git", "config", "--global", key, value])


def ensure_git_config(host: Host, key: str, value: str) -> bool:
    """Set a global git option unless it already holds ``value``. Returns True if changed."""

    if git_config_get(host, key) == value:
        return False
    git_config_set(host, key, value)
    return True

from __future__ import annotations

import logging
from pathlib import Path

from .host import Host

logger = logging.getLogger(__name__)


def fetch(host: Host, url: str, dest: str | Path, *, sudo: bool = False) -> Path:
    """Download ``url`` to ``dest`` with curl (fails on HTTP errors, follows redirects)."""

    d = Path(dest)
    host.run(["curl", "-fsSL", url, "-o", str(d)], sudo=sudo)
    return d


def fetch_and_extract(host: Host, url: str, dest_dir: str | Path) -> Path:
    """Download a .tgz into ``dest_dir`` and unpack it there."""

    d = Path(dest_dir)
    archive = fetch(host, url, d / url.rsplit("/", 1)[-1])
    host.run(["tar", "xzf", str(archive), "-C", str(d)])
    return d


def install_binary(host: Host, src: str | Path, dest: str | Path, *, sudo: bool = False) -> None:
    host.run(["install", "-m", "0755", str(src), str(dest)], sudo=sudo)

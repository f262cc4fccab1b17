from __future__ import annotations

import logging
from typing import Sequence

from .host import Host

logger = logging.getLogger(__name__)

_APT_ENV = {"DEBIAN_FRONTEND": "noninteractive"}


def apt_update(host: Host) -> None:
    host.run(["apt-get", "update"], sudo=True, env=_APT_ENV)


def apt_install(
    host: Host,
    packages: Sequence[str],
    *,
    with_recommends: bool = True,
) -> None:
    if not packages:
        return
    argv = [
        "apt-get",
        "install",
        "-y",
        "-qq",
    ]
    if not with_recommends:
        argv.append("--no-install-recommends")
    host.run([*argv, *packages], sudo=True, env=_APT_ENV)


def write_apt_source(host: Host, path: str, line: str, *, comment: str | None = None) -> None:
    """Write a one-line apt source file under /etc (needs root, so goes through tee)."""

    contents = ""
    if comment:
        contents += f"# {comment}\n"
    contents += line.rstrip("\n") + "\n"
    host.run(["tee", path], sudo=True, input_text=contents)
    logger.info("Configured apt source %s", path)


def npm_install_global(host: Host, package: str) -> None:
    host.run(["npm", "install", "-g", package], sudo=True)

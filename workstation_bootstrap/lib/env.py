from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    env_default: str = "environment.yml"
    versions_default: str = "versions.yml"
    log_default: str = "~/.local/state/workstation-bootstrap/bootstrap.log"
    bin_dir: str = "/usr/local/bin"
    apt_sources_dir: str = "/etc/apt/sources.list.d"
    apt_keyrings_dir: str = "/etc/apt/keyrings"
    lsb_release_file: str = "/etc/lsb-release"


PATHS = Paths()

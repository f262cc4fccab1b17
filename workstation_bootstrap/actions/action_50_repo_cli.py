from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from ..env_config import Configuration
from ..lib.download import fetch_and_extract, install_binary
from ..lib.env import PATHS
from ..lib.host import Host

logger = logging.getLogger(__name__)

HUB_URL = "https://github.com/github/hub/releases/download/v{version}/hub-linux-amd64-{version}.tgz"


class EnsureRepoCliAction:
    action_id = "50_repo_cli"
    fatal = True

    def __init__(self, *, bin_dir: str = PATHS.bin_dir) -> None:
        self.bin_dir = bin_dir

    def run(self, config: Configuration, host: Host) -> None:
        dest = Path(self.bin_dir) / "hub"
        if dest.exists():
            logger.debug("hub already installed at %s", dest)
            return

        version = config.hub_version
        logger.info("Setting up GitHub CLI (hub %s)", version)

        sudo = not host.is_writable(self.bin_dir)
        if sudo:
            logger.warning("%s not writable by current user, please provide sudo password", self.bin_dir)

        with tempfile.TemporaryDirectory(prefix="hub-") as td:
            fetch_and_extract(host, HUB_URL.format(version=version), td)
            src = Path(td) / f"hub-linux-amd64-{version}" / "bin" / "hub"
            install_binary(host, src, dest, sudo=sudo)

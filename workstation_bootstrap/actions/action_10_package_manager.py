from __future__ import annotations

import logging

from ..env_config import Configuration
from ..lib.host import Host
from ..lib.pkg import apt_install, apt_update

logger = logging.getLogger(__name__)


class EnsurePackageManagerAction:
    action_id = "10_package_manager"
    fatal = True

    def run(self, config: Configuration, host: Host) -> None:
        if host.which("npm"):
            logger.debug("npm already installed")
            return

        logger.info("Installing NPM...")
        apt_update(host)
        apt_install(host, ["npm"])

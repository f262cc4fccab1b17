from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import List

from ..env_config import Configuration
from ..errors import ActionError
from ..lib.command import CommandError
from ..lib.distro import read_lsb_release
from ..lib.download import fetch, install_binary
from ..lib.env import PATHS
from ..lib.host import Host
from ..lib.pkg import apt_install, apt_update, write_apt_source
from ..lib.systemd import enable_service, service_is_active, service_is_enabled, start_service

logger = logging.getLogger(__name__)

DOCKER_UNIT = "docker"
DOCKER_PACKAGES = ["docker-ce", "docker-ce-cli", "containerd.io"]
DOCKER_GPG_URL = "https://download.docker.com/linux/ubuntu/gpg"
DOCKER_REPO_URL = "https://download.docker.com/linux/ubuntu"

COMPOSE_IMAGE = "docker/compose"
COMPOSE_URL = "https://github.com/docker/compose/releases/download/{version}/run.sh"


class EnsureContainerRuntimeAction:
    """Docker engine, its daemon, and the version-pinned compose wrapper."""

    action_id = "40_container_runtime"
    fatal = True

    def __init__(
        self,
        *,
        sources_list: str = f"{PATHS.apt_sources_dir}/docker.list",
        keyring: str = f"{PATHS.apt_keyrings_dir}/docker.asc",
        compose_path: str = f"{PATHS.bin_dir}/docker-compose",
        lsb_release_file: str = PATHS.lsb_release_file,
    ) -> None:
        self.sources_list = sources_list
        self.keyring = keyring
        self.compose_path = compose_path
        self.lsb_release_file = lsb_release_file

    def run(self, config: Configuration, host: Host) -> None:
        compose_version = config.compose_version

        if not Path(self.sources_list).exists():
            self._add_repository(host)

        if not host.which("docker"):
            self._install_engine(host)

        self._ensure_daemon(host)
        self._ensure_compose(host, compose_version)

    def _add_repository(self, host: Host) -> None:
        release = read_lsb_release(self.lsb_release_file)
        codename = release.get("DISTRIB_CODENAME")
        if not codename:
            raise ActionError(f"Cannot determine distribution codename from {self.lsb_release_file}")

        logger.info("Installing GPG key for Docker repository...")
        host.run(["install", "-m", "0755", "-d", str(Path(self.keyring).parent)], sudo=True)
        fetch(host, DOCKER_GPG_URL, self.keyring, sudo=True)
        write_apt_source(
            host,
            self.sources_list,
            f"deb [signed-by={self.keyring}] {DOCKER_REPO_URL} {codename} stable",
            comment=" ".join(
                v for v in (release.get("DISTRIB_ID"), codename, release.get("DISTRIB_RELEASE")) if v
            ),
        )

    def _install_engine(self, host: Host) -> None:
        logger.info("Updating repos...")
        apt_update(host)
        logger.info("Installing latest Docker engine version...")
        apt_install(host, DOCKER_PACKAGES)
        logger.info("Adding current user to docker group...")
        host.run(["usermod", "-aG", "docker", host.user], sudo=True)

    def _ensure_daemon(self, host: Host) -> None:
        if not service_is_enabled(host, DOCKER_UNIT):
            logger.info("Enabling startup Docker daemon...")
            enable_service(host, DOCKER_UNIT)
        if not service_is_active(host, DOCKER_UNIT):
            logger.warning("Docker is stopped. Starting it...")
            start_service(host, DOCKER_UNIT)

    def _compose_tags(self, host: Host) -> List[str]:
        # Only reachable without docker in a dry run on a fresh machine.
        if not host.which("docker"):
            return []
        r = host.run(["docker", "images", COMPOSE_IMAGE, "--format", "{{.Tag}}"], sudo=True, read_only=True)
        return [t.strip() for t in r.stdout.splitlines() if t.strip()]

    def _ensure_compose(self, host: Host, version: str) -> None:
        tags = self._compose_tags(host)
        if version in tags and Path(self.compose_path).exists():
            logger.debug("Docker Compose %s already installed", version)
            return

        logger.info("Installing Docker Compose %s...", version)
        for previous in tags:
            if previous == version:
                continue
            logger.info("Removing previous version %s...", previous)
            try:
                host.run(["docker", "rmi", f"{COMPOSE_IMAGE}:{previous}"], sudo=True)
            except CommandError as e:
                logger.warning("Could not remove %s:%s: %s", COMPOSE_IMAGE, previous, e)

        with tempfile.TemporaryDirectory(prefix="compose-") as td:
            wrapper = fetch(host, COMPOSE_URL.format(version=version), Path(td) / "docker-compose")
            logger.info("Copying new version to PATH")
            install_binary(host, wrapper, self.compose_path, sudo=not host.is_writable(Path(self.compose_path).parent))

        # The wrapper runs this image; pulling now keeps the next probe accurate.
        host.run(["docker", "pull", f"{COMPOSE_IMAGE}:{version}"], sudo=True)

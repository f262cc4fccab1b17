from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from ..errors import UnsupportedPlatformError
from .env import PATHS
from .host import Host

logger = logging.getLogger(__name__)

SUPPORTED_DISTRIBUTION = "Ubuntu"
SUPPORTED_INIT_TOOL = "systemctl"


@dataclass(frozen=True)
class DistributionInfo:
    distrib_id: str
    release: Optional[str] = None
    codename: Optional[str] = None


def read_lsb_release(path: str = PATHS.lsb_release_file) -> Dict[str, str]:
    """Parse /etc/lsb-release style ``KEY=VALUE`` lines (quotes stripped)."""

    p = Path(path)
    if not p.exists():
        return {}

    out: Dict[str, str] = {}
    for line in p.read_text(encoding="utf-8", errors="ignore").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        out[key.strip()] = value.strip().strip('"').strip("'")
    return out


def check_distribution(
    host: Host,
    *,
    expected: str = SUPPORTED_DISTRIBUTION,
    lsb_release_file: str = PATHS.lsb_release_file,
) -> DistributionInfo:
    """Refuse to go on unless the host runs systemd and reports ``expected``."""

    if not host.which(SUPPORTED_INIT_TOOL):
        raise UnsupportedPlatformError("Incorrect init system.")

    if not host.which("lsb_release"):
        raise UnsupportedPlatformError("Incorrect Linux Distribution: lsb_release not found.")

    r = host.run(["lsb_release", "-i", "-s"], check=False, read_only=True)
    reported = r.stdout.strip()
    if r.returncode != 0 or reported != expected:
        raise UnsupportedPlatformError(
            f"Incorrect Linux Distribution: expected {expected}, got {reported or 'nothing'}."
        )

    release = read_lsb_release(lsb_release_file)
    info = DistributionInfo(
        distrib_id=reported,
        release=release.get("DISTRIB_RELEASE"),
        codename=release.get("DISTRIB_CODENAME"),
    )
    logger.info("Distribution %s %s (%s)", info.distrib_id, info.release or "?", info.codename or "?")
    return info

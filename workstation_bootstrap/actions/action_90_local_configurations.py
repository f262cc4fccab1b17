from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..env_config import Configuration
from ..lib.assets import bundled_configs_dir, copy_tree
from ..lib.host import Host

logger = logging.getLogger(__name__)


class CopyLocalConfigurationsAction:
    """Copy the bundled config tree into ~/.config, overwriting on every run."""

    action_id = "90_local_configurations"
    fatal = False

    def __init__(self, *, source: Optional[str] = None, dest: Optional[str] = None) -> None:
        self.source = source
        self.dest = dest

    def run(self, config: Configuration, host: Host) -> None:
        src = Path(self.source) if self.source else bundled_configs_dir()
        dst = Path(self.dest) if self.dest else host.home / ".config"

        written = 0
        for entry in sorted(src.iterdir()):
            written += len(copy_tree(entry, dst / entry.name, dry_run=host.dry_run))
        logger.info("Copied %d configuration file(s) from %s to %s", written, src, dst)

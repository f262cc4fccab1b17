from __future__ import annotations

import logging
import re
import shlex
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from ..env_config import Configuration
from ..lib.host import Host

logger = logging.getLogger(__name__)

ALIASES: Tuple[Tuple[str, str], ...] = (
    ("ll", "ls -l"),
    ("git", "hub"),
)


def defined_aliases(text: str) -> set[str]:
    """Names of every ``alias name=...`` already present in a shell file."""

    names: set[str] = set()
    for line in text.splitlines():
        m = re.match(r"^\s*alias\s+([^=\s]+)=", line)
        if m:
            names.add(m.group(1))
    return names


class InstallAliasesAction:
    action_id = "60_aliases"
    fatal = False

    def __init__(
        self,
        *,
        alias_file: Optional[str] = None,
        aliases: Sequence[Tuple[str, str]] = ALIASES,
    ) -> None:
        self.alias_file = alias_file
        self.aliases = tuple(aliases)

    def run(self, config: Configuration, host: Host) -> None:
        path = Path(self.alias_file) if self.alias_file else host.home / ".bash_aliases"
        existing = path.read_text(encoding="utf-8") if path.exists() else ""
        present = defined_aliases(existing)

        missing: List[str] = [f"alias {key}={shlex.quote(value)}" for key, value in self.aliases if key not in present]
        if not missing:
            logger.debug("All aliases already present in %s", path)
            return

        prefix = "" if not existing or existing.endswith("\n") else "\n"
        host.append_text(path, prefix + "\n".join(missing) + "\n")
        logger.info("Added %d alias(es) to %s", len(missing), path)

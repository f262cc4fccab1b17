from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


def bundled_configs_dir() -> Path:
    # workstation_bootstrap/lib/assets.py -> workstation_bootstrap/assets/configs
    return Path(__file__).resolve().parents[1] / "assets" / "configs"


def copy_tree(src: str | Path, dst: str | Path, *, dry_run: bool = False) -> List[Path]:
    """Copy ``src`` (file or directory) onto ``dst``, overwriting existing files.

    Returns the destination files written.
    """

    s = Path(src)
    d = Path(dst)
    if not s.exists():
        raise FileNotFoundError(str(src))

    if dry_run:
        logger.info("Would copy tree %s -> %s", str(s), str(d))
        return []

    written: List[Path] = []
    if s.is_file():
        d.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(s, d)
        return [d]

    d.mkdir(parents=True, exist_ok=True)
    for item in sorted(s.rglob("*")):
        rel = item.relative_to(s)
        out = d / rel
        if item.is_dir():
            out.mkdir(parents=True, exist_ok=True)
        else:
            out.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(item, out)
            written.append(out)
    return written

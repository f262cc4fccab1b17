from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Optional

from ..env_config import Configuration
from ..lib.host import Host

logger = logging.getLogger(__name__)

FONTS_REPO = "https://github.com/powerline/fonts.git"
FONT_GLOB = "*Powerline.ttf"


class EnsurePatchedFontsAction:
    action_id = "80_patched_fonts"
    fatal = False

    def __init__(self, *, font_dir: Optional[str] = None) -> None:
        self.font_dir = font_dir

    def run(self, config: Configuration, host: Host) -> None:
        font_dir = Path(self.font_dir) if self.font_dir else host.home / ".local" / "share" / "fonts"
        if font_dir.exists() and any(font_dir.rglob(FONT_GLOB)):
            logger.debug("Powerline fonts already present under %s", font_dir)
            return

        logger.info("Installing patched fonts...")
        with tempfile.TemporaryDirectory(prefix="fonts-") as td:
            checkout = Path(td) / "fonts"
            host.run(["git", "clone", "--depth=1", FONTS_REPO, str(checkout)])
            # install.sh writes under $HOME; keep it on the directory probed above.
            host.run(["./install.sh"], cwd=str(checkout), env={"HOME": str(host.home)})

from __future__ import annotations

import logging

from ..env_config import Configuration
from ..lib.gitcfg import git_config_get, git_config_set
from ..lib.host import Host
from ..lib.pkg import npm_install_global

logger = logging.getLogger(__name__)

DIFF_TOOL = "diff-so-fancy"
PAGER = "diff-so-fancy | less --tabs=4 -RFX"

HIGHLIGHT_COLORS = (
    ("color.diff-highlight.oldNormal", "red bold"),
    ("color.diff-highlight.oldHighlight", "red bold 52"),
    ("color.diff-highlight.newNormal", "green bold"),
    ("color.diff-highlight.newHighlight", "green bold 22"),
)


class EnsureDiffToolAction:
    action_id = "20_diff_tool"
    fatal = False

    def run(self, config: Configuration, host: Host) -> None:
        if not host.which(DIFF_TOOL):
            logger.info("Installing %s for git...", DIFF_TOOL)
            npm_install_global(host, DIFF_TOOL)

        # Never overwrite a pager the user picked, whatever scope it lives in.
        current = git_config_get(host, "core.pager", scope=None)
        if current:
            logger.debug("core.pager already set to %r; leaving it", current)
            return

        logger.info('Setting default pager to "%s"', DIFF_TOOL)
        git_config_set(host, "core.pager", PAGER)
        for key, value in HIGHLIGHT_COLORS:
            git_config_set(host, key, value)

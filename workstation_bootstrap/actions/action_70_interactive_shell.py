from __future__ import annotations

import logging
import re
from pathlib import Path

from ..env_config import Configuration
from ..lib.host import Host
from ..lib.pkg import apt_install, apt_update

logger = logging.getLogger(__name__)

OH_MY_ZSH_INSTALLER = "https://raw.githubusercontent.com/ohmyzsh/ohmyzsh/master/tools/install.sh"

_THEME_RE = re.compile(r'^ZSH_THEME=.*$', re.MULTILINE)


class EnsureInteractiveShellAction:
    action_id = "70_interactive_shell"
    fatal = False

    def run(self, config: Configuration, host: Host) -> None:
        if not host.which("zsh"):
            logger.info("Installing zsh shell...")
            apt_update(host)
            apt_install(host, ["zsh"])

        if not (host.home / ".oh-my-zsh").exists():
            logger.info("Installing oh-my-zsh...")
            host.run(
                ["sh", "-c", f"curl -fsSL {OH_MY_ZSH_INSTALLER} | sh -s -- --unattended"],
                env={"RUNZSH": "no", "CHSH": "no"},
            )

        self._switch_theme(host, host.home / ".zshrc", config.zsh_theme)

    def _switch_theme(self, host: Host, zshrc: Path, theme: str) -> None:
        if not zshrc.exists():
            logger.debug("%s not found; theme left alone", zshrc)
            return

        text = zshrc.read_text(encoding="utf-8")
        wanted = f'ZSH_THEME="{theme}"'
        m = _THEME_RE.search(text)
        if m and m.group(0) == wanted:
            return

        if m:
            text = text[: m.start()] + wanted + text[m.end():]
        else:
            text = text + ("" if text.endswith("\n") or not text else "\n") + wanted + "\n"
        host.write_text(zshrc, text)
        logger.info("Switched zsh theme to %s", theme)

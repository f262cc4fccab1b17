from __future__ import annotations

import getpass
import logging
import os
import shutil
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence

from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)


class Host:
    """Everything an action needs from the machine it provisions.

    Actions never call subprocess or shutil.which directly; they go through
    a Host so a run can be dry-run, time-bounded, or faked in tests.
    ``env`` is an overlay applied to every subprocess; ``os.environ`` itself
    is left alone.
    """

    def __init__(
        self,
        *,
        home: Optional[str | Path] = None,
        env: Optional[Mapping[str, str]] = None,
        dry_run: bool = False,
        timeout_s: Optional[float] = None,
    ) -> None:
        self.home = Path(home) if home is not None else Path.home()
        self.env: Dict[str, str] = dict(env or {})
        self.dry_run = dry_run
        self.timeout_s = timeout_s

    @property
    def user(self) -> str:
        return os.environ.get("USER") or getpass.getuser()

    def overlay_env(self, values: Mapping[str, str]) -> None:
        self.env.update(values)

    def which(self, name: str) -> Optional[str]:
        return shutil.which(name)

    def is_root(self) -> bool:
        return os.geteuid() == 0

    def is_writable(self, path: str | Path) -> bool:
        return os.access(str(path), os.W_OK)

    def run(
        self,
        argv: Sequence[str],
        *,
        check: bool = True,
        sudo: bool = False,
        cwd: Optional[str] = None,
        input_text: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
        read_only: bool = False,
    ) -> CmdResult:
        """Run a command on the host.

        read_only commands only inspect the host, so they still execute in
        dry-run mode; everything else is just logged.

        sudo resets the environment, so under sudo the overlay is handed to
        the child through ``env KEY=VALUE``.
        """
        overlay = {**self.env, **(env or {})}
        argv_list = list(argv)
        if sudo and not self.is_root():
            argv_list = ["sudo", "env", *(f"{k}={v}" for k, v in overlay.items()), *argv_list]
        return run_cmd(
            argv_list,
            check=check,
            env=overlay,
            cwd=cwd,
            input_text=input_text,
            timeout_s=self.timeout_s,
            dry_run=self.dry_run and not read_only,
        )

    def write_text(self, path: str | Path, contents: str) -> None:
        p = Path(path)
        if self.dry_run:
            logger.info("Would write %s", str(p))
            return
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(contents, encoding="utf-8")

    def append_text(self, path: str | Path, contents: str) -> None:
        p = Path(path)
        if self.dry_run:
            logger.info("Would append to %s", str(p))
            return
        p.parent.mkdir(parents=True, exist_ok=True)
        with p.open("a", encoding="utf-8") as f:
            f.write(contents)

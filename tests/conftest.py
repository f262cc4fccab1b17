"""
Pytest configuration and fixtures for workstation-bootstrap tests.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pytest

from workstation_bootstrap.env_config import Configuration
from workstation_bootstrap.lib.command import CmdResult, CommandError, fmt_argv
from workstation_bootstrap.lib.host import Host

# Commands that only look at the host.
READ_ONLY = {
    ("git", "config", "--get"),
    ("git", "config", "--global", "--get"),
    ("systemctl", "is-active"),
    ("systemctl", "is-enabled"),
    ("docker", "images"),
    ("lsb_release",),
}

# apt/npm package -> binary it puts on PATH
PROVIDES = {
    "npm": "npm",
    "zsh": "zsh",
    "docker-ce": "docker",
    "diff-so-fancy": "diff-so-fancy",
}


class FakeHost(Host):
    """In-memory stand-in for the machine: PATH, git config, systemd, docker images."""

    def __init__(self, home: Path, *, binaries: Sequence[str] = (), distro: str = "Ubuntu") -> None:
        super().__init__(home=home)
        self.binaries = set(binaries)
        self.distro = distro
        self.git: Dict[str, str] = {}
        self.services: Dict[str, Dict[str, bool]] = {"docker": {"enabled": False, "active": False}}
        self.images: List[str] = []
        self.failing: Dict[tuple, int] = {}
        self.commands: List[List[str]] = []
        self.envs: List[Dict[str, str]] = []

    def which(self, name: str) -> Optional[str]:
        return f"/usr/bin/{name}" if name in self.binaries else None

    @property
    def user(self) -> str:
        return "jane"

    def is_root(self) -> bool:
        return False

    def is_writable(self, path) -> bool:
        return True

    @property
    def mutations(self) -> List[List[str]]:
        out = []
        for argv in self.commands:
            if not any(tuple(argv[: len(prefix)]) == prefix for prefix in READ_ONLY):
                out.append(argv)
        return out

    def run(self, argv, *, check=True, sudo=False, cwd=None, input_text=None, env=None, read_only=False) -> CmdResult:
        argv = list(argv)
        self.commands.append(argv)
        self.envs.append({**self.env, **(env or {})})

        rc, out = self._dispatch(argv, input_text)
        for prefix, code in self.failing.items():
            if tuple(argv[: len(prefix)]) == prefix:
                rc, out = code, ""

        result = CmdResult(argv=argv, returncode=rc, stdout=out, stderr="")
        if check and rc != 0:
            raise CommandError(f"Command failed ({rc}): {fmt_argv(argv)}", result)
        return result

    def _dispatch(self, argv: List[str], input_text: Optional[str]):
        if argv[:2] == ["git", "config"]:
            args = [a for a in argv[2:] if a != "--global"]
            if args[0] == "--get":
                value = self.git.get(args[1])
                return (0, value + "\n") if value is not None else (1, "")
            self.git[args[0]] = args[1]
            return 0, ""

        if argv[0] == "lsb_release":
            return 0, self.distro + "\n"

        if argv[0] == "systemctl":
            verb, unit = argv[1], argv[2]
            svc = self.services.setdefault(unit, {"enabled": False, "active": False})
            if verb == "is-active":
                return (0, "active\n") if svc["active"] else (3, "inactive\n")
            if verb == "is-enabled":
                return (0, "enabled\n") if svc["enabled"] else (1, "disabled\n")
            if verb == "enable":
                svc["enabled"] = True
            if verb == "start":
                svc["active"] = True
            return 0, ""

        if argv[:2] == ["docker", "images"]:
            return 0, "".join(f"{t}\n" for t in self.images)
        if argv[:2] == ["docker", "rmi"]:
            tag = argv[2].split(":", 1)[1]
            self.images = [t for t in self.images if t != tag]
            return 0, ""
        if argv[:2] == ["docker", "pull"]:
            self.images.append(argv[2].split(":", 1)[1])
            return 0, ""

        if argv[:2] == ["apt-get", "install"]:
            for pkg in argv[2:]:
                if pkg in PROVIDES:
                    self.binaries.add(PROVIDES[pkg])
            return 0, ""

        if argv[:3] == ["npm", "install", "-g"]:
            if argv[3] in PROVIDES:
                self.binaries.add(PROVIDES[argv[3]])
            return 0, ""

        if argv[0] == "tee":
            Path(argv[1]).parent.mkdir(parents=True, exist_ok=True)
            Path(argv[1]).write_text(input_text or "", encoding="utf-8")
            return 0, ""

        if argv[0] == "curl" and "-o" in argv:
            dest = Path(argv[argv.index("-o") + 1])
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_text("downloaded\n", encoding="utf-8")
            return 0, ""

        if argv[:2] == ["sh", "-c"] and "ohmyzsh" in argv[2]:
            (self.home / ".oh-my-zsh").mkdir(exist_ok=True)
            (self.home / ".zshrc").write_text(
                'export ZSH="$HOME/.oh-my-zsh"\nZSH_THEME="robbyrussell"\nplugins=(git)\n',
                encoding="utf-8",
            )
            return 0, ""

        if argv == ["./install.sh"]:
            fonts = self.home / ".local" / "share" / "fonts"
            fonts.mkdir(parents=True, exist_ok=True)
            (fonts / "Meslo LG M Regular for Powerline.ttf").write_bytes(b"\0")
            return 0, ""

        if argv[:3] == ["install", "-m", "0755"] and argv[3] != "-d":
            # install SRC DEST: materialize DEST so the next probe sees it.
            dest = Path(argv[4])
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_text("#!/bin/sh\n", encoding="utf-8")
            return 0, ""

        return 0, ""

    def ran(self, *prefix: str) -> bool:
        return any(tuple(argv[: len(prefix)]) == prefix for argv in self.commands)


@pytest.fixture
def home(tmp_path: Path) -> Path:
    h = tmp_path / "home"
    h.mkdir()
    return h


@pytest.fixture
def fake_host(home: Path) -> FakeHost:
    return FakeHost(home, binaries=["systemctl", "lsb_release"])


@pytest.fixture
def config() -> Configuration:
    return Configuration(
        raw={
            "FULL_NAME": "Jane Doe",
            "PERSONAL_EMAIL": "jane@example.com",
            "COMPOSE_VERSION": "1.29.2",
            "HUB_VERSION": "2.14.2",
        }
    )


@pytest.fixture
def lsb_release_file(tmp_path: Path) -> Path:
    p = tmp_path / "lsb-release"
    p.write_text(
        "DISTRIB_ID=Ubuntu\nDISTRIB_RELEASE=22.04\nDISTRIB_CODENAME=jammy\n"
        'DISTRIB_DESCRIPTION="Ubuntu 22.04.4 LTS"\n',
        encoding="utf-8",
    )
    return p


@pytest.fixture
def reset_logging():
    """Undo configure_logging() so each test starts from a bare root logger."""
    root = logging.getLogger()
    level = root.level
    yield
    for h in getattr(root, "_workstation_bootstrap_handlers", []):
        root.removeHandler(h)
        h.close()
    for attr in (
        "_workstation_bootstrap_configured",
        "_workstation_bootstrap_log_path",
        "_workstation_bootstrap_handlers",
    ):
        if hasattr(root, attr):
            delattr(root, attr)
    root.setLevel(level)

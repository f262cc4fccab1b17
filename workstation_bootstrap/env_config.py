from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional

import yaml

from .errors import ConfigError

_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

DEFAULT_ZSH_THEME = "agnoster"


def load_env_document(path: str) -> Dict[str, str]:
    """Read a one-level key/value document into ``{UPPER_KEY: value}``.

    Only top-level scalar keys are kept. A key that introduces a list or a
    nested mapping, or has no value at all, is skipped. Every scalar stays a
    string (``1.10`` is not read as a float).
    """

    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read configuration file {path}: {e}") from e

    try:
        root = yaml.compose(text, Loader=yaml.BaseLoader)
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed configuration file {path}: {e}") from e

    if root is None:
        return {}
    if not isinstance(root, yaml.MappingNode):
        raise ConfigError(f"{path} must contain top-level 'key: value' lines")

    out: Dict[str, str] = {}
    for key_node, value_node in root.value:
        if not isinstance(key_node, yaml.ScalarNode):
            raise ConfigError(f"{path}: top-level keys must be plain names")
        name = key_node.value.strip()
        if not _KEY_RE.match(name):
            raise ConfigError(f"{path}: invalid setting name {name!r}")

        upper = name.upper()
        if upper in out:
            raise ConfigError(f"{path}: duplicate setting {upper}")

        if not isinstance(value_node, yaml.ScalarNode):
            continue
        value = value_node.value.strip()
        # `key:` on its own line; a quoted "" is still a value.
        if not value and value_node.style is None:
            continue
        out[upper] = value
    return out


@dataclass(frozen=True)
class Configuration:
    """Read-only settings for one run."""

    raw: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        normalized = {str(k).upper(): str(v) for k, v in dict(self.raw).items()}
        object.__setattr__(self, "raw", MappingProxyType(normalized))

    def __getitem__(self, key: str) -> str:
        return self.raw[key.upper()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.upper() in self.raw

    def __iter__(self) -> Iterator[str]:
        return iter(self.raw)

    def __len__(self) -> int:
        return len(self.raw)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.raw.get(key.upper(), default)

    def require(self, key: str) -> str:
        value = self.raw.get(key.upper())
        if not value:
            raise ConfigError(f"Missing required setting {key.upper()}")
        return value

    def as_environ(self) -> Dict[str, str]:
        return dict(self.raw)

    @property
    def full_name(self) -> str:
        return self.require("FULL_NAME")

    @property
    def personal_email(self) -> str:
        return self.require("PERSONAL_EMAIL")

    @property
    def compose_version(self) -> str:
        return self.require("COMPOSE_VERSION")

    @property
    def hub_version(self) -> str:
        return self.require("HUB_VERSION")

    @property
    def zsh_theme(self) -> str:
        return self.get("ZSH_THEME") or DEFAULT_ZSH_THEME


def load_configuration(env_path: str, versions_path: Optional[str] = None) -> Configuration:
    """Load the environment document, then merge the version pins over it."""

    values = load_env_document(env_path)
    if versions_path is not None:
        values.update(load_env_document(versions_path))
    return Configuration(raw=values)

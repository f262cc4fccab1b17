from __future__ import annotations

from typing import Optional


class BootstrapError(Exception):
    """Base class for every condition that stops a run."""


class ConfigError(BootstrapError):
    pass


class UnsupportedPlatformError(BootstrapError):
    pass


class ActionError(BootstrapError):
    """Raised by an action; ``fatal`` decides whether the run goes on."""

    def __init__(self, message: str, *, fatal: bool = True, action_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.fatal = fatal
        self.action_id = action_id

    def __str__(self) -> str:
        msg = super().__str__()
        if self.action_id:
            return f"{self.action_id}: {msg}"
        return msg

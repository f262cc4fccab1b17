from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence

from .env_config import Configuration
from .errors import ActionError
from .lib.host import Host

logger = logging.getLogger(__name__)


class Action(Protocol):
    """A single idempotent provisioning action."""

    action_id: str
    fatal: bool

    def run(self, config: Configuration, host: Host) -> None:
        ...


@dataclass(frozen=True)
class ActionWarning:
    action_id: str
    message: str


@dataclass(frozen=True)
class RunReport:
    ran_actions: List[str] = field(default_factory=list)
    warnings: List[ActionWarning] = field(default_factory=list)
    failure: Optional[ActionError] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def run_actions(
    *,
    actions: Sequence[Action],
    config: Configuration,
    host: Host,
) -> RunReport:
    """Run actions in order, one at a time.

    A fatal ActionError stops the run; later actions are not attempted.
    Anything else an action raises takes the action's own ``fatal`` flag.
    """

    seen: set[str] = set()
    for action in actions:
        if action.action_id in seen:
            raise ValueError(f"Duplicate action id: {action.action_id}")
        seen.add(action.action_id)

    ran: List[str] = []
    warnings: List[ActionWarning] = []

    for action in actions:
        logger.info("Running action %s", action.action_id)
        try:
            action.run(config, host)
        except ActionError as e:
            err = e
        except Exception as e:
            err = ActionError(str(e), fatal=action.fatal)
            err.__cause__ = e
        else:
            ran.append(action.action_id)
            continue

        if err.action_id is None:
            err.action_id = action.action_id
        ran.append(action.action_id)

        if err.fatal:
            logger.error("Action failed: %s", err)
            return RunReport(ran_actions=ran, warnings=warnings, failure=err)

        logger.warning("Action did not complete: %s", err)
        warnings.append(ActionWarning(action_id=action.action_id, message=str(err)))

    return RunReport(ran_actions=ran, warnings=warnings)

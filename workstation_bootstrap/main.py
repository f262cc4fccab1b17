from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from .actions import (
    ConfigureVersionControlAction,
    CopyLocalConfigurationsAction,
    EnsureContainerRuntimeAction,
    EnsureDiffToolAction,
    EnsureInteractiveShellAction,
    EnsurePackageManagerAction,
    EnsurePatchedFontsAction,
    EnsureRepoCliAction,
    InstallAliasesAction,
)
from .env_config import load_configuration
from .errors import BootstrapError
from .lib.distro import check_distribution
from .lib.env import PATHS
from .lib.host import Host
from .logging_utils import DEFAULT_LOG_PATH, configure_logging, fatal
from .pipeline import Action, RunReport, run_actions

logger = logging.getLogger(__name__)


def build_actions() -> list[Action]:
    return [
        EnsurePackageManagerAction(),
        EnsureDiffToolAction(),
        ConfigureVersionControlAction(),
        EnsureContainerRuntimeAction(),
        EnsureRepoCliAction(),
        InstallAliasesAction(),
        EnsureInteractiveShellAction(),
        EnsurePatchedFontsAction(),
        CopyLocalConfigurationsAction(),
    ]


def run(
    *,
    env_path: str = PATHS.env_default,
    versions_path: Optional[str] = PATHS.versions_default,
    host: Optional[Host] = None,
    actions: Optional[Sequence[Action]] = None,
) -> RunReport:
    """Load settings, check the platform, then run every action once.

    Raises ConfigError or UnsupportedPlatformError before any action runs,
    and the fatal ActionError if one stopped the run.
    """

    config = load_configuration(env_path, versions_path)
    logger.info("Loaded %d setting(s) from %s", len(config), env_path)

    host = host or Host()
    host.overlay_env(config.as_environ())

    check_distribution(host)

    report = run_actions(
        actions=build_actions() if actions is None else actions,
        config=config,
        host=host,
    )
    if report.failure is not None:
        raise report.failure

    if report.warnings:
        logger.warning(
            "Finished with %d warning(s): %s",
            len(report.warnings),
            ", ".join(w.action_id for w in report.warnings),
        )
    else:
        logger.info("All %d action(s) completed", len(report.ran_actions))
    return report


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="workstation-bootstrap")
    p.add_argument("--env", default=PATHS.env_default, help="Path to the environment description (yaml)")
    p.add_argument("--versions", default=PATHS.versions_default, help="Path to the version pins (yaml)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to the bootstrap log")
    p.add_argument("--dry-run", action="store_true", help="Log commands and file writes without running them")
    p.add_argument("--timeout", type=float, default=None, help="Per-command timeout in seconds (default: none)")
    p.add_argument("--verbose", action="store_true", help="Log command output too")

    args = p.parse_args(argv)

    configure_logging(log_path=args.log, level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        run(
            env_path=args.env,
            versions_path=args.versions,
            host=Host(dry_run=args.dry_run, timeout_s=args.timeout),
        )
    except BootstrapError as e:
        fatal(logger, "%s", e)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations

import logging

from ..env_config import Configuration
from ..lib.gitcfg import ensure_git_config
from ..lib.host import Host

logger = logging.getLogger(__name__)

CREDENTIAL_HELPER = "cache --timeout=3600"
# git ignores aliases that shadow a builtin, so signing gets its own name.
SIGNED_COMMIT_ALIAS = ("alias.sc", "commit -S")


class ConfigureVersionControlAction:
    action_id = "30_version_control"
    fatal = True

    def run(self, config: Configuration, host: Host) -> None:
        settings = [
            ("user.name", config.full_name),
            ("user.email", config.personal_email),
            ("credential.helper", CREDENTIAL_HELPER),
            SIGNED_COMMIT_ALIAS,
        ]

        changed = [key for key, value in settings if ensure_git_config(host, key, value)]
        if changed:
            logger.info("Updated git settings: %s", ", ".join(changed))
        else:
            logger.debug("git settings already up to date")

from __future__ import annotations

from .host import Host


def service_is_active(host: Host, unit: str) -> bool:
    r = host.run(["systemctl", "is-active", unit], check=False, read_only=True)
    return r.stdout.strip() == "active"


def service_is_enabled(host: Host, unit: str) -> bool:
    r = host.run(["systemctl", "is-enabled", unit], check=False, read_only=True)
    return r.stdout.strip() == "enabled"


def enable_service(host: Host, unit: str) -> None:
    host.run(["systemctl", "enable", unit], sudo=True)


def start_service(host: Host, unit: str) -> None:
    host.run(["systemctl", "start", unit], sudo=True)

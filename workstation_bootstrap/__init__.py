"""Developer workstation bootstrap (Python-first, idempotent).

Core design goals:
- One fixed, ordered catalogue of provisioning actions
- Probe first, act only when something is missing or out of date
- Configuration passed explicitly, never read from global state
- Centralized logging
"""

__all__ = []

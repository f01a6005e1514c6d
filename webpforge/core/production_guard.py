"""Production configuration guard — enforces hard constraints in production.

Runs once at startup and fails hard (raises ``ProductionConfigError``) if a
production-critical setting is wrong.  Other code should not scatter
``if is_production`` checks.
"""

from __future__ import annotations

import logging

from webpforge.config import ForgeSettings

logger = logging.getLogger(__name__)


class ProductionConfigError(RuntimeError):
    """Raised when production configuration constraints are violated.

    It must not be caught and ignored — the process should exit.
    """


def enforce_production_constraints(settings: ForgeSettings) -> None:
    """Validate production-critical settings.

    Constraints enforced
    --------------------
    1. Debug mode must be disabled.
    2. Stale-artifact reclaiming must not be forced on: published
       artifacts may still be served from long-lived caches.

    Raises
    ------
    ProductionConfigError
        If any constraint is violated.
    """
    if not settings.is_production:
        return

    violations: list[str] = []

    if settings.debug:
        violations.append(
            "debug=True is not allowed in production. Set WEBPFORGE_DEBUG=false."
        )

    if settings.reclaim_stale:
        violations.append(
            "reclaim_stale=True is not allowed in production. "
            "Unset WEBPFORGE_RECLAIM_STALE or set it to false."
        )

    if violations:
        msg = "Production configuration guard failed.\n" + "\n".join(
            f"  - {v}" for v in violations
        )
        logger.critical(msg)
        raise ProductionConfigError(msg)

    logger.info("Production configuration guard passed.")

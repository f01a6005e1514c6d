"""Adversarial tests for the production configuration guard.

Production must never run with debug on or with stale-artifact reclaiming
forced on: published artifacts may still be served from long-lived caches.
"""

from __future__ import annotations

import pytest

from webpforge.config import ForgeSettings
from webpforge.core.production_guard import (
    ProductionConfigError,
    enforce_production_constraints,
)


class TestProductionGuard:
    def test_debug_true_in_production_raises(self):
        with pytest.raises(ProductionConfigError, match="debug=True"):
            enforce_production_constraints(ForgeSettings(environment="production", debug=True))

    def test_forced_reclaim_in_production_raises(self):
        settings = ForgeSettings(environment="production", reclaim_stale=True)
        with pytest.raises(ProductionConfigError, match="reclaim_stale=True"):
            enforce_production_constraints(settings)

    def test_all_violations_reported_together(self):
        settings = ForgeSettings(environment="production", debug=True, reclaim_stale=True)
        with pytest.raises(ProductionConfigError) as info:
            enforce_production_constraints(settings)
        assert "debug=True" in str(info.value)
        assert "reclaim_stale=True" in str(info.value)

    def test_default_production_passes_and_never_reclaims(self):
        settings = ForgeSettings(environment="production")
        enforce_production_constraints(settings)
        assert settings.to_transform_config().reclaim is False

    def test_development_is_permissive(self):
        enforce_production_constraints(
            ForgeSettings(environment="development", debug=True, reclaim_stale=True)
        )

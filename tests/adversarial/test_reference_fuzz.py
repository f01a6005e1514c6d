"""Adversarial tests for malformed references and paths.

Malformed input must fail fast with ``InvalidPathError`` or
``ResolutionError`` and never produce a half-formed artifact name.
"""

from __future__ import annotations

import pytest

from webpforge.core.path_mapper import InvalidPathError
from webpforge.core.resolver import ResolutionError
from webpforge.models.decisions import DecisionOutcome


class TestMalformedReferences:
    @pytest.mark.parametrize("ref", ["icon", "", "dir/", "dir/.webp", "a.b/icon"])
    def test_rejected_before_any_io(self, make_engine, store, ref, context):
        with pytest.raises((InvalidPathError, ResolutionError)):
            make_engine().process(ref, context)
        assert store.write_count == 0

    def test_upper_case_extension_is_not_virtual(self, make_engine, add_source, context):
        add_source("icon.png", 20000)
        engine = make_engine()
        assert engine.handles("icon.WEBP") is False

    def test_double_virtual_extension(self, make_engine, add_source, store, context):
        add_source("icon.webp.png", 20000)
        decision = make_engine().process("icon.webp.webp", context)
        assert decision.outcome == DecisionOutcome.TRANSFORMED
        assert decision.reference == "icon.webp.a1b2c3.webp"
        assert store.exists("/proj/src/icon.webp.a1b2c3.webp")

    def test_traversal_stays_normalized(self, make_engine, add_source, store, context):
        add_source("icon.png", 20000)
        decision = make_engine().process("./x/../icon.webp", context)
        assert decision.source_path == "/proj/src/icon.png"
        assert decision.reference == "./x/../icon.a1b2c3.webp"

"""Tests for raw portfolio record normalization."""

import json
import pytest

from aporte_app.errors import MalformedPositionError
from aporte_app.models import Position, TargetAllocation
from aporte_app.providers.normalizer import normalize_positions, normalize_targets


class TestNormalizePositions:
    """Test position normalization."""

    def test_aliases(self):
        """Test both record generations are understood."""
        raw = [
            {"fiiCode": "hglg11", "currentValue": "1500.50", "fiiName": "CSHG", "setor": "LOGISTICA"},
            {"fund_code": "KNRI11", "current_value": 800, "name": "Kinea"},
        ]

        positions = normalize_positions(raw)

        assert positions == [
            Position("HGLG11", 1500.5, name="CSHG", sector="LOGISTICA"),
            Position("KNRI11", 800.0, name="Kinea"),
        ]

    def test_json_string(self):
        """Test positions stored as a JSON string."""
        raw = json.dumps([{"fiiCode": "MXRF11", "currentValue": 100}])
        assert normalize_positions(raw) == [Position("MXRF11", 100.0)]

    def test_malformed_entries_skipped(self):
        """Test unusable records are dropped, valid ones kept."""
        raw = [
            {"currentValue": 100},
            {"fiiCode": "AAAA11", "currentValue": "abc"},
            "not a dict",
            {"fiiCode": "BBBB11"},
        ]

        assert normalize_positions(raw) == [Position("BBBB11", 0.0)]

    def test_unparseable_container(self):
        """Test broken JSON raises."""
        with pytest.raises(MalformedPositionError):
            normalize_positions("{not json")

        with pytest.raises(MalformedPositionError):
            normalize_positions('{"fiiCode": "A"}')

    def test_none(self):
        assert normalize_positions(None) == []


class TestNormalizeTargets:
    """Test target model normalization."""

    def test_aliases(self):
        raw = [{"ticker": "VISC11", "segment": "SHOPPING", "allocation": "12.5", "name": "Vinci"}]

        assert normalize_targets(raw) == [TargetAllocation("VISC11", "SHOPPING", 12.5, name="Vinci")]

    def test_missing_percentage_skipped(self):
        raw = [{"ticker": "VISC11"}, {"ticker": "HGLG11", "percentage": 10}]

        assert normalize_targets(raw) == [TargetAllocation("HGLG11", "OTHER", 10.0)]

    def test_none_means_no_model(self):
        """Test absent model is distinguishable from an empty one."""
        assert normalize_targets(None) is None
        assert normalize_targets([]) == []

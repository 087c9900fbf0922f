"""Tests for the metric merge rules."""

from __future__ import annotations

from db.models.enums import StatPerspective
from pipelines.maps import TEAM_HITTING_FIELDS, TEAM_RANKINGS_CURIOUS_FACTS, TEAM_RANKINGS_HITTING
from pipelines.transformers.merge import derive_total, map_record_fields, split_perspective


class TestMapRecordFields:
    """Tests for JSON record field mapping."""

    def test_maps_present_fields_only(self) -> None:
        record = {"teamName": "Toronto Blue Jays", "atBats": "5000", "runs": 780, "hits": None, "doubles": "-"}
        values = map_record_fields(record, TEAM_HITTING_FIELDS)
        assert values == {"AB": 5000.0, "R": 780.0}

    def test_games_played_maps_to_unit_count(self) -> None:
        values = map_record_fields({"gamesPlayed": 150}, TEAM_HITTING_FIELDS)
        assert values == {"G": 150.0}


class TestDeriveTotal:
    """Tests for derived aggregates."""

    def test_games_times_current(self) -> None:
        assert derive_total(162, 1.23) == 199.26
        assert derive_total(150, 4.5) == 675.0

    def test_precision(self) -> None:
        assert derive_total(3, 1.0 / 3, precision=3) == 1.0
        assert derive_total(7, 1.234, precision=1) == 8.6

    def test_absent_when_games_unknown_or_zero(self) -> None:
        assert derive_total(0, 1.23) is None
        assert derive_total(-1, 1.23) is None
        assert derive_total(None, 1.23) is None
        assert derive_total(162, None) is None


class TestSplitPerspective:
    """Tests for "O"-prefixed opponent keys."""

    def test_opponent_prefix(self) -> None:
        assert split_perspective("OYRFI", TEAM_RANKINGS_CURIOUS_FACTS) == ("YRFI", StatPerspective.OPPONENT)
        assert split_perspective("O1IR/G", TEAM_RANKINGS_CURIOUS_FACTS) == ("1IR/G", StatPerspective.OPPONENT)

    def test_own_key(self) -> None:
        assert split_perspective("YRFI", TEAM_RANKINGS_CURIOUS_FACTS) == ("YRFI", StatPerspective.OWN)

    def test_o_metrics_without_base_stay_own(self) -> None:
        """OBP and OPS start with O but are not opponent views."""
        assert split_perspective("OBP", TEAM_RANKINGS_HITTING) == ("OBP", StatPerspective.OWN)
        assert split_perspective("OPS", TEAM_RANKINGS_HITTING) == ("OPS", StatPerspective.OWN)

"""Tests for the roster, player stats and player fielding pipelines."""

from __future__ import annotations

import pytest

from db.models import Player, PlayerStat, StatCategory, StatType
from db.registry import ReferenceRegistry
from pipelines.extractors import FieldingRow, RosterEntry
from pipelines.player_fielding import PlayerFieldingPipeline
from pipelines.player_roster import PlayerRosterPipeline
from pipelines.player_season_stats import PlayerSeasonStatsPipeline, takes_group
from pipelines.transformers.names import normalize_team_name
from schemas.common import ApiStatus


TORONTO = 141
BOSTON = 111


def player_stats(name: str, category: str) -> dict[str, float]:
    query = (
        PlayerStat.select(PlayerStat, StatType)
        .join(StatType)
        .join(StatCategory)
        .switch(PlayerStat)
        .join(Player)
        .where((Player.name == name) & (StatCategory.name == category))
    )
    return {row.stat_type.name: row.total for row in query}


@pytest.fixture
def roster(database, stub_mlb):
    """Toronto roster: a shortstop, an outfielder, a pitcher and a two-way player."""
    mlb = stub_mlb(rosters={
        TORONTO: [
            RosterEntry(666182, "Bo Bichette", "11", "SS", "A"),
            RosterEntry(543807, "George Springer", "4", "OF", "A"),
            RosterEntry(605400, "Chris Bassitt", "40", "P", "A"),
            RosterEntry(660271, "Two Way", "17", "TWP", "A"),
        ],
    })
    PlayerRosterPipeline(mlb).run_sync()
    return mlb


class TestPlayerRosterPipeline:
    """Tests for roster import."""

    def test_imports_roster(self, roster) -> None:
        bichette = Player.find_by_mlb_id(666182)
        assert bichette.team.name == "Toronto Blue Jays"
        assert (bichette.name_key, bichette.number, bichette.position) == ("bo bichette", "11", "SS")

    def test_failed_team_is_skipped(self, database, stub_mlb) -> None:
        mlb = stub_mlb(
            rosters={BOSTON: [RosterEntry(646240, "Rafael Devers", "11", "3B", "A")]},
            failing={TORONTO},
        )

        result = PlayerRosterPipeline(mlb).run_sync()

        assert result.status == ApiStatus.SUCCESS
        assert result.units_skipped == 1
        assert result.records_processed == 1
        assert Player.find_by_mlb_id(646240).team.name == "Boston Red Sox"

    def test_trade_moves_player(self, roster, stub_mlb) -> None:
        traded = stub_mlb(rosters={BOSTON: [RosterEntry(666182, "Bo Bichette", "11", "SS", "A")]})

        PlayerRosterPipeline(traded).run_sync()

        assert Player.select().where(Player.mlb_player_id == 666182).count() == 1
        assert Player.find_by_mlb_id(666182).team.name == "Boston Red Sox"


class TestTakesGroup:
    @pytest.mark.parametrize(
        "position,group,expected",
        [
            ("P", "pitching", True),
            ("P", "hitting", False),
            ("SS", "hitting", True),
            ("SS", "pitching", False),
            (None, "hitting", True),
            ("TWP", "hitting", True),
            ("TWP", "pitching", True),
        ],
    )
    def test_routing(self, position, group, expected) -> None:
        assert takes_group(position, group) is expected


class TestPlayerSeasonStatsPipeline:
    """Tests for player season totals."""

    def test_routes_groups_by_position(self, roster, stub_mlb) -> None:
        mlb = stub_mlb(player_stats={
            "hitting": [
                {"playerId": 666182, "homeRuns": 18, "avg": ".311"},
                {"playerId": 605400, "homeRuns": 0},
                {"playerId": 660271, "homeRuns": 40},
                {"playerId": 999999, "homeRuns": 50},
            ],
            "pitching": [
                {"playerId": 605400, "era": "3.99", "strikeOuts": 150},
                {"playerId": 666182, "era": "0.00"},
                {"playerId": 660271, "era": "2.50"},
            ],
        })

        result = PlayerSeasonStatsPipeline(mlb).run_sync()

        assert result.status == ApiStatus.SUCCESS
        assert player_stats("Bo Bichette", "PlayerHitting") == {"HR": 18.0, "AVG": 0.311}
        assert player_stats("Bo Bichette", "PlayerPitching") == {}
        assert player_stats("Chris Bassitt", "PlayerHitting") == {}
        assert player_stats("Chris Bassitt", "PlayerPitching") == {"ERA": 3.99, "SO": 150.0}
        assert player_stats("Two Way", "PlayerHitting") == {"HR": 40.0}
        assert player_stats("Two Way", "PlayerPitching") == {"ERA": 2.5}

    def test_player_metric_is_distinct_from_team_metric(self, roster, stub_mlb) -> None:
        ReferenceRegistry(normalize_team_name).ensure_stat_type_id("HR", "Hitting")
        mlb = stub_mlb(player_stats={"hitting": [{"playerId": 666182, "homeRuns": 18}]})

        PlayerSeasonStatsPipeline(mlb).run_sync()

        assert StatType.select().where(StatType.name == "HR").count() == 2

    def test_failed_group_is_skipped(self, roster, stub_mlb) -> None:
        mlb = stub_mlb(
            player_stats={"pitching": [{"playerId": 605400, "era": "3.99"}]},
            failing={"hitting"},
        )

        result = PlayerSeasonStatsPipeline(mlb).run_sync()

        assert result.units_skipped == 1
        assert player_stats("Chris Bassitt", "PlayerPitching") == {"ERA": 3.99}


class TestPlayerFieldingPipeline:
    """Tests for fielding import through the position matcher."""

    def test_matches_rows_to_roster_positions(self, roster, stub_almanac) -> None:
        almanac = stub_almanac(teams={
            "TOR": [
                FieldingRow("Bichette, Bo", "SS", {"PO": 180.0, "A": 350.0, "E": 12.0}),
                FieldingRow("George Springer", "1B", {"PO": 20.0, "E": 0.0}),
                FieldingRow("George Springer", "LF", {"PO": 190.0, "E": 2.0, "FLD%": None}),
                FieldingRow("Chris Bassitt", "C", {"PO": 3.0}),
                FieldingRow("Unknown Guy", "SS", {"PO": 1.0}),
            ],
        }, failing={"BOS"})

        result = PlayerFieldingPipeline(almanac).run_sync()

        assert result.status == ApiStatus.SUCCESS
        assert result.units_skipped == 1
        assert player_stats("Bo Bichette", "PlayerFielding") == {"PO": 180.0, "A": 350.0, "E": 12.0}
        assert player_stats("George Springer", "PlayerFielding") == {"PO": 190.0, "E": 2.0}
        assert player_stats("Chris Bassitt", "PlayerFielding") == {}
        assert not Player.select().where(Player.name == "Unknown Guy").exists()

"""Tests for the source extractors, with HTTP replaced by MagicMock clients."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from core.resilience import PayloadError
from pipelines.extractors import (
    BaseballAlmanacExtractor,
    MLBStatsExtractor,
    TeamRankingsExtractor,
)
from pipelines.extractors.mlb_stats import parse_roster_entry, parse_schedule_game


class TestMLBStatsExtractor:
    """Tests for MLBStatsExtractor."""

    def test_team_stats(self, make_client) -> None:
        client = make_client(payload={"stats": [{"teamName": "Toronto Blue Jays", "atBats": "5000"}, "junk"]})
        extractor = MLBStatsExtractor(client=client)

        records = extractor.get_team_stats("hitting", 2025)

        assert records == [{"teamName": "Toronto Blue Jays", "atBats": "5000"}]
        url = client.get_json.call_args.args[0]
        assert "group=hitting" in url
        assert "season=2025" in url

    def test_unknown_group(self, make_client) -> None:
        with pytest.raises(ValueError):
            MLBStatsExtractor(client=make_client()).get_player_stats("fielding")

    @pytest.mark.parametrize("payload", [[], {"stats": None}, {"other": []}, "oops"])
    def test_unexpected_shape_is_payload_error(self, make_client, payload: object) -> None:
        with pytest.raises(PayloadError):
            MLBStatsExtractor(client=make_client(payload=payload)).get_team_stats("pitching")

    def test_roster(self, make_client) -> None:
        payload = {
            "roster": [
                {
                    "person": {"id": 666182, "fullName": "Bo Bichette"},
                    "jerseyNumber": "11",
                    "position": {"abbreviation": "SS"},
                    "status": {"code": "A"},
                },
                {"person": {"fullName": "No Id"}},
            ]
        }
        extractor = MLBStatsExtractor(client=make_client(payload=payload))

        entries = extractor.get_roster(141, 2025)

        assert len(entries) == 1
        assert entries[0].mlb_player_id == 666182
        assert (entries[0].number, entries[0].position, entries[0].status) == ("11", "SS", "A")

    def test_roster_entry_optional_fields(self) -> None:
        entry = parse_roster_entry({"person": {"id": "7", "fullName": " A  B "}})
        assert entry.mlb_player_id == 7
        assert entry.name == "A B"
        assert entry.number is None and entry.position is None

    def test_schedule(self, make_client) -> None:
        payload = {
            "dates": [{
                "games": [
                    {
                        "gamePk": 778001,
                        "gameDate": "2025-03-27T23:07:00Z",
                        "venue": {"name": "Rogers Centre"},
                        "teams": {
                            "home": {
                                "team": {"name": "Toronto Blue Jays"},
                                "leagueRecord": {"wins": 1, "losses": 0, "pct": "1.000"},
                            },
                            "away": {
                                "team": {"name": "Baltimore Orioles"},
                                "leagueRecord": {"wins": 0, "losses": 1, "pct": ".000"},
                            },
                        },
                        "linescore": {
                            "teams": {
                                "home": {"runs": 2, "hits": 5, "errors": 0},
                                "away": {"runs": 0, "hits": 3, "errors": 1},
                            },
                            "innings": [
                                {"num": 1, "home": {"runs": 2, "hits": 2, "errors": 0}, "away": {"runs": 0}},
                                {"home": {"runs": 0}},
                            ],
                        },
                    },
                    {"gameDate": "2025-03-27T17:05:00Z"},
                ],
            }],
        }
        client = make_client(payload=payload)

        games = MLBStatsExtractor(client=client).get_schedule(date(2025, 3, 27))

        assert "date=2025-03-27" in client.get_json.call_args.args[0]
        assert len(games) == 1
        game = games[0]
        assert game.game_pk == 778001
        assert game.date == datetime(2025, 3, 27, 23, 7)
        assert game.venue == "Rogers Centre"
        assert (game.home.team, game.home.wins, game.home.pct) == ("Toronto Blue Jays", 1, 1.0)
        assert (game.away.runs, game.away.hits, game.away.errors) == (0, 3, 1)
        assert [inning.number for inning in game.innings] == [1]
        assert game.innings[0].away == (0, None, None)

    def test_schedule_day_without_games(self, make_client) -> None:
        extractor = MLBStatsExtractor(client=make_client(payload={"totalGames": 0}))
        assert extractor.get_schedule(date(2025, 1, 1)) == []

    def test_schedule_not_an_object(self, make_client) -> None:
        with pytest.raises(PayloadError):
            MLBStatsExtractor(client=make_client(payload=[])).get_schedule(date(2025, 4, 1))

    def test_game_date_falls_back_to_requested_day(self) -> None:
        game = parse_schedule_game({"gamePk": 1, "gameDate": "soon"}, date(2025, 4, 2))
        assert game.date == datetime(2025, 4, 2)
        assert game.innings == ()
        assert game.home.runs is None


class TestTeamRankingsExtractor:
    """Tests for TeamRankingsExtractor."""

    def test_stat_rows(self, make_client, stat_page_html: str) -> None:
        client = make_client(text=stat_page_html)

        rows = TeamRankingsExtractor(client=client).get_stat_rows("singles-per-game")

        assert [row.team for row in rows] == ["Toronto", "LA Dodgers"]
        assert rows[0].current_season == 4.5
        assert rows[1].prev_season is None
        client.get_text.assert_called_once_with("https://www.teamrankings.com/mlb/stat/singles-per-game")

    def test_win_trend_rows(self, make_client, win_trend_html: str) -> None:
        rows = TeamRankingsExtractor(client=make_client(text=win_trend_html)).get_win_trend_rows("all_games")

        assert [(row.team, row.record, row.win_pct) for row in rows] == [
            ("Toronto", "94-68", 58.0),
            ("Colorado", "43-119", 26.5),
        ]

    def test_page_without_table(self, make_client) -> None:
        assert TeamRankingsExtractor(client=make_client(text="<html></html>")).get_stat_rows("x") == []

    def test_default_client_sends_browser_headers(self) -> None:
        headers = TeamRankingsExtractor().client.session.headers

        assert "Mozilla" in headers["User-Agent"]
        assert headers["Referer"].startswith("https://www.teamrankings.com/mlb")


class TestBaseballAlmanacExtractor:
    """Tests for BaseballAlmanacExtractor."""

    def test_fielding_rows(self, make_client, fielding_page_html: str) -> None:
        client = make_client(text=fielding_page_html)

        rows = BaseballAlmanacExtractor(client=client).get_fielding_rows("TOR", 2025)

        assert [(row.name, row.position) for row in rows] == [
            ("Bichette, Bo", "SS"),
            ("George Springer", "RF"),
            ("George Springer", "1B"),
        ]
        assert rows[0].values == {"PO": 180.0, "A": 350.0, "E": 12.0, "FLD%": 0.978}
        assert "t=TOR" in client.get_text.call_args.args[0]

    def test_default_client_sends_browser_headers(self) -> None:
        extractor = BaseballAlmanacExtractor()
        headers = extractor.client.session.headers

        assert "Mozilla" in headers["User-Agent"]
        assert headers["Referer"].startswith("https://www.baseball-almanac.com")

    def test_team_schedule(self, make_client) -> None:
        page = """
        <table>
          <tr><th>Game</th><th>Date</th><th>Opponent</th><th>Score</th><th>Decision</th><th>Record</th></tr>
          <tr><td>1</td><td>03-27-2025</td><td>vs Baltimore Orioles</td><td>2-0</td><td>W</td><td>1-0</td></tr>
        </table>
        """
        client = make_client(text=page)

        schedule = BaseballAlmanacExtractor(client=client).get_team_schedule("tor", 2025)

        url = client.get_text.call_args.args[0]
        assert "schedule.php" in url
        assert "t=TOR" in url and "y=2025" in url
        assert [(g.game_number, g.opponent, g.is_home) for g in schedule.games] == [
            (1, "Baltimore Orioles", True),
        ]
        assert schedule.monthly == [] and schedule.opponents == []

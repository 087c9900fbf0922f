"""Shared pytest fixtures for the ingestion tests.

This module contains fixtures used across multiple test modules:
- Database fixtures (in-memory SQLite bound to the peewee proxy)
- Registry fixture (fresh per-test caches)
- HTTP stand-ins (MagicMock clients returning canned pages / JSON)
- Sample page fixtures (TeamRankings stat table, Almanac fielding page)

Example:
    def test_something(database, registry):
        team_id = registry.ensure_team_id("Toronto")
"""
from __future__ import annotations

from typing import Any, Callable, Generator
from unittest.mock import MagicMock

import pytest
from peewee import SqliteDatabase

from db.base import db
from db.models import ALL_MODELS
from db.registry import ReferenceRegistry
from pipelines.transformers.names import normalize_team_name


# =============================================================================
# Database
# =============================================================================


@pytest.fixture
def database() -> Generator[SqliteDatabase, None, None]:
    """Bind an in-memory SQLite database with every table created."""
    test_db = SqliteDatabase(":memory:", pragmas={"foreign_keys": 1})
    db.initialize(test_db)
    test_db.connect()
    test_db.create_tables(ALL_MODELS)

    yield test_db

    test_db.drop_tables(ALL_MODELS)
    test_db.close()


@pytest.fixture
def file_database(tmp_path) -> Generator[SqliteDatabase, None, None]:
    """On-disk SQLite database, for tests whose queries run on other threads."""
    test_db = SqliteDatabase(str(tmp_path / "strike_test.db"), pragmas={"foreign_keys": 1})
    db.initialize(test_db)
    test_db.connect()
    test_db.create_tables(ALL_MODELS)
    test_db.close()

    yield test_db

    if not test_db.is_closed():
        test_db.close()


@pytest.fixture
def registry(database: SqliteDatabase) -> ReferenceRegistry:
    """Fresh reference registry over the test database."""
    return ReferenceRegistry(normalize_team_name)


# =============================================================================
# HTTP stand-ins
# =============================================================================


def _client(text: str = "", payload: Any = None) -> MagicMock:
    """MagicMock shaped like ResilientHTTPClient."""
    client = MagicMock()
    client.get_text.return_value = text
    client.get_json.return_value = payload
    return client


@pytest.fixture
def make_client() -> Callable[..., MagicMock]:
    """Factory for stand-in HTTP clients: make_client(text=..., payload=...)."""
    return _client


# =============================================================================
# Sample pages
# =============================================================================


@pytest.fixture
def stat_page_html() -> str:
    """TeamRankings stat page with a header row and two teams."""
    return """
    <html><body>
      <table class="tr-table datatable scrollable">
        <thead>
          <tr><th>Rank</th><th>Team</th><th>2025</th><th>Last 3</th>
              <th>Last 1</th><th>Home</th><th>Away</th><th>2024</th></tr>
        </thead>
        <tbody>
          <tr><td>1</td><td><a href="/mlb/team/toronto-blue-jays">Toronto</a></td>
              <td>4.5</td><td>4.2</td><td>5.0</td><td>4.8</td><td>4.1</td><td>4.3</td></tr>
          <tr><td>2</td><td>LA Dodgers</td>
              <td>4.4</td><td>3.7</td><td>2.0</td><td>4.6</td><td>4.2</td><td>--</td></tr>
        </tbody>
      </table>
    </body></html>
    """


@pytest.fixture
def win_trend_html() -> str:
    return """
    <table class="tr-table datatable">
      <thead><tr><th>Team</th><th>Win-Loss Record</th><th>Win %</th><th>MOV</th></tr></thead>
      <tbody>
        <tr><td>Toronto</td><td>94-68</td><td>58.0%</td><td>+1.2</td></tr>
        <tr><td>Colorado</td><td>43-119</td><td>26.5%</td><td>-2.6</td></tr>
      </tbody>
    </table>
    """


@pytest.fixture
def fielding_page_html() -> str:
    """Almanac-style page: a navigation table, a partial table and the full one."""
    return """
    <html><body>
      <table><tr><td>Team Menu</td><td>Rosters</td></tr></table>
      <table>
        <tr><th>Name</th><th>POS</th><th>PO</th><th>A</th><th>E</th></tr>
        <tr><td>Someone Else</td><td>C</td><td>1</td><td>1</td><td>1</td></tr>
      </table>
      <table>
        <tr><td colspan="6">2025 Toronto Blue Jays Fielding Stats</td></tr>
        <tr><td>Player</td><td>Pos</td><td>Putouts</td><td>Assists</td>
            <td>Errors</td><td>Fld%</td></tr>
        <tr><td><a href="/players/bichebo01">Bichette, Bo</a></td><td>SS</td>
            <td>180</td><td>350</td><td>12</td><td>.978</td></tr>
        <tr><td><a href="/players/springe01">George Springer</a></td><td>RF</td>
            <td>190</td><td>5</td><td>2</td><td>.990</td></tr>
        <tr><td><a href="/players/springe01">George Springer</a></td><td>1B</td>
            <td>20</td><td>1</td><td>0</td><td>1.000</td></tr>
        <tr><td>Team Totals</td><td></td><td>4300</td><td>1500</td><td>80</td><td>.986</td></tr>
        <tr><td>After Totals</td><td>C</td><td>1</td><td>1</td><td>1</td><td>.500</td></tr>
      </table>
    </body></html>
    """

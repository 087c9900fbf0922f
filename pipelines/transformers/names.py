"""
Name Transformers

Canonical keys for matching teams and players across data sources.

Teams resolve through a static alias table. Players have no such table, so
their names are reduced to a matching key that tolerates name order,
suffixes, accents, punctuation and a couple of known scraper artifacts.
The player key is for matching only, never for display.
"""

import unicodedata
from typing import Mapping, Optional

from pipelines.maps import TEAM_ALIAS_INDEX
from pipelines.transformers.values import clean_text


NAME_SUFFIXES = frozenset({"jr", "sr", "ii", "iii", "iv", "v"})


def normalize_team_name(name: Optional[str], aliases: Mapping[str, str] = TEAM_ALIAS_INDEX) -> str:
    """
    Resolve a team label to its canonical name.

    Lookup is case-insensitive and ignores surrounding/repeated whitespace.
    Labels missing from the alias table pass through (cleaned) as already
    canonical.

    Examples:
        >>> normalize_team_name("  la dodgers ")
        'Los Angeles Dodgers'
        >>> normalize_team_name("Toronto Blue Jays")
        'Toronto Blue Jays'
    """
    cleaned = clean_text(name)
    return aliases.get(cleaned.casefold(), cleaned)


def _bare(token: str) -> str:
    return "".join(ch for ch in token if ch.isalnum()).lower()


def _strip_suffixes(text: str) -> str:
    tokens = text.split()
    while tokens and _bare(tokens[-1]) in NAME_SUFFIXES:
        tokens.pop()
    return " ".join(tokens)


def _reorder_last_first(text: str) -> str:
    if text.count(",") != 1:
        return text
    last, first = (_strip_suffixes(part.strip()) for part in text.split(","))
    if last and first:
        return f"{first} {last}"
    return text


def _remove_diacritics(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    return unicodedata.normalize("NFC", stripped)


def _collapse_doubled(token: str) -> str:
    half, odd = divmod(len(token), 2)
    if half and not odd and token[:half] == token[half:]:
        return token[:half]
    return token


def _normalize_once(text: str) -> str:
    text = _reorder_last_first(text)
    text = _strip_suffixes(text)
    text = _remove_diacritics(text)
    text = "".join(ch for ch in text if ch.isalnum() or ch.isspace())

    tokens = [_collapse_doubled(token) for token in text.lower().split()]

    deduped: list[str] = []
    for token in tokens:
        if not deduped or deduped[-1] != token:
            deduped.append(token)
    return " ".join(deduped)


def normalize_player_name(name: Optional[str]) -> str:
    """
    Reduce a player name to its matching key.

    Steps: "Last, First" -> "First Last" (exactly one comma), trailing
    Jr./Sr./II/III/IV/V dropped, accents removed, punctuation removed,
    lowercased with single spaces, "michaelmichael" -> "michael",
    "king king" -> "king".

    The steps are repeated until the key stops changing, so normalizing a
    key again is a no-op.

    Examples:
        >>> normalize_player_name("Bichette, Bo")
        'bo bichette'
        >>> normalize_player_name("José Ramírez")
        'jose ramirez'
        >>> normalize_player_name("Vladimir Guerrero Jr.")
        'vladimir guerrero'
    """
    key = clean_text(name)
    while True:
        # Each pass either leaves the key alone or shortens it
        next_key = _normalize_once(key)
        if next_key == key:
            return key
        key = next_key

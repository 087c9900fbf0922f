"""
Static Source Maps

Immutable lookup tables shared by extractors, transformers and pipelines:
team aliases and ids, JSON field -> metric key maps, TeamRankings page
slugs and header synonym sets. Loaded once at import; never mutated.
"""

from types import MappingProxyType


# ---------------------------------------------------------------------------
# Teams
# ---------------------------------------------------------------------------

CANONICAL_TEAM_NAMES = (
    "Arizona Diamondbacks",
    "Athletics",
    "Atlanta Braves",
    "Baltimore Orioles",
    "Boston Red Sox",
    "Chicago Cubs",
    "Chicago White Sox",
    "Cincinnati Reds",
    "Cleveland Guardians",
    "Colorado Rockies",
    "Detroit Tigers",
    "Houston Astros",
    "Kansas City Royals",
    "Los Angeles Angels",
    "Los Angeles Dodgers",
    "Miami Marlins",
    "Milwaukee Brewers",
    "Minnesota Twins",
    "New York Mets",
    "New York Yankees",
    "Philadelphia Phillies",
    "Pittsburgh Pirates",
    "San Diego Padres",
    "San Francisco Giants",
    "Seattle Mariners",
    "St. Louis Cardinals",
    "Tampa Bay Rays",
    "Texas Rangers",
    "Toronto Blue Jays",
    "Washington Nationals",
)

# Short and historical labels used by TeamRankings and the MLB feeds
_TEAM_ALIASES = {
    "LA Dodgers": "Los Angeles Dodgers",
    "Dodgers": "Los Angeles Dodgers",
    "Chi Cubs": "Chicago Cubs",
    "Cubs": "Chicago Cubs",
    "NY Yankees": "New York Yankees",
    "Yankees": "New York Yankees",
    "Arizona": "Arizona Diamondbacks",
    "D-backs": "Arizona Diamondbacks",
    "Diamondbacks": "Arizona Diamondbacks",
    "Detroit": "Detroit Tigers",
    "Tigers": "Detroit Tigers",
    "Philadelphia": "Philadelphia Phillies",
    "Phillies": "Philadelphia Phillies",
    "Boston": "Boston Red Sox",
    "Red Sox": "Boston Red Sox",
    "St. Louis": "St. Louis Cardinals",
    "St Louis": "St. Louis Cardinals",
    "Cardinals": "St. Louis Cardinals",
    "Milwaukee": "Milwaukee Brewers",
    "Brewers": "Milwaukee Brewers",
    "Cincinnati": "Cincinnati Reds",
    "Reds": "Cincinnati Reds",
    "Seattle": "Seattle Mariners",
    "Mariners": "Seattle Mariners",
    "Washington": "Washington Nationals",
    "Nationals": "Washington Nationals",
    "NY Mets": "New York Mets",
    "Mets": "New York Mets",
    "Tampa Bay": "Tampa Bay Rays",
    "Rays": "Tampa Bay Rays",
    "San Diego": "San Diego Padres",
    "Padres": "San Diego Padres",
    "Sacramento": "Athletics",
    "Oakland": "Athletics",
    "Oakland Athletics": "Athletics",
    "Sacramento Athletics": "Athletics",
    "A's": "Athletics",
    "Toronto": "Toronto Blue Jays",
    "Blue Jays": "Toronto Blue Jays",
    "SF Giants": "San Francisco Giants",
    "Giants": "San Francisco Giants",
    "Miami": "Miami Marlins",
    "Marlins": "Miami Marlins",
    "Atlanta": "Atlanta Braves",
    "Braves": "Atlanta Braves",
    "Cleveland": "Cleveland Guardians",
    "Cleveland Indians": "Cleveland Guardians",
    "Guardians": "Cleveland Guardians",
    "LA Angels": "Los Angeles Angels",
    "Angels": "Los Angeles Angels",
    "Houston": "Houston Astros",
    "Astros": "Houston Astros",
    "Minnesota": "Minnesota Twins",
    "Twins": "Minnesota Twins",
    "Baltimore": "Baltimore Orioles",
    "Orioles": "Baltimore Orioles",
    "Chi Sox": "Chicago White Sox",
    "Chi White Sox": "Chicago White Sox",
    "White Sox": "Chicago White Sox",
    "Texas": "Texas Rangers",
    "Rangers": "Texas Rangers",
    "Pittsburgh": "Pittsburgh Pirates",
    "Pirates": "Pittsburgh Pirates",
    "Kansas City": "Kansas City Royals",
    "Royals": "Kansas City Royals",
    "Colorado": "Colorado Rockies",
    "Rockies": "Colorado Rockies",
}

# Alias -> canonical name; canonical names map to themselves
TEAM_NAME_ALIASES = MappingProxyType(
    {**{name: name for name in CANONICAL_TEAM_NAMES}, **_TEAM_ALIASES}
)

# Case-folded lookup index over TEAM_NAME_ALIASES
TEAM_ALIAS_INDEX = MappingProxyType(
    {alias.casefold(): canonical for alias, canonical in TEAM_NAME_ALIASES.items()}
)

# MLB Stats API team id -> canonical name
MLB_TEAM_IDS = MappingProxyType({
    108: "Los Angeles Angels",
    109: "Arizona Diamondbacks",
    110: "Baltimore Orioles",
    111: "Boston Red Sox",
    112: "Chicago Cubs",
    113: "Cincinnati Reds",
    114: "Cleveland Guardians",
    115: "Colorado Rockies",
    116: "Detroit Tigers",
    117: "Houston Astros",
    118: "Kansas City Royals",
    119: "Los Angeles Dodgers",
    120: "Washington Nationals",
    121: "New York Mets",
    133: "Athletics",
    134: "Pittsburgh Pirates",
    135: "San Diego Padres",
    136: "Seattle Mariners",
    137: "San Francisco Giants",
    138: "St. Louis Cardinals",
    139: "Tampa Bay Rays",
    140: "Texas Rangers",
    141: "Toronto Blue Jays",
    142: "Minnesota Twins",
    143: "Philadelphia Phillies",
    144: "Atlanta Braves",
    145: "Chicago White Sox",
    146: "Miami Marlins",
    147: "New York Yankees",
    158: "Milwaukee Brewers",
})

# Baseball Almanac team code -> canonical name
ALMANAC_TEAM_CODES = MappingProxyType({
    "TOR": "Toronto Blue Jays",
    "BOS": "Boston Red Sox",
    "NYA": "New York Yankees",
    "TBR": "Tampa Bay Rays",
    "BAL": "Baltimore Orioles",
    "DET": "Detroit Tigers",
    "CLG": "Cleveland Guardians",
    "KCA": "Kansas City Royals",
    "MIN": "Minnesota Twins",
    "CHA": "Chicago White Sox",
    "HOA": "Houston Astros",
    "SEA": "Seattle Mariners",
    "TEX": "Texas Rangers",
    "ANG": "Los Angeles Angels",
    "ATH": "Athletics",
    "PHI": "Philadelphia Phillies",
    "NYN": "New York Mets",
    "MIA": "Miami Marlins",
    "ATL": "Atlanta Braves",
    "WS0": "Washington Nationals",
    "ML4": "Milwaukee Brewers",
    "CHN": "Chicago Cubs",
    "CN5": "Cincinnati Reds",
    "SLN": "St. Louis Cardinals",
    "PIT": "Pittsburgh Pirates",
    "SDN": "San Diego Padres",
    "LAN": "Los Angeles Dodgers",
    "ARI": "Arizona Diamondbacks",
    "SFN": "San Francisco Giants",
    "COL": "Colorado Rockies",
})


# ---------------------------------------------------------------------------
# Stat categories
# ---------------------------------------------------------------------------

HITTING = "Hitting"
PITCHING = "Pitching"
FIELDING = "Fielding"
CURIOUS_FACTS = "CuriousFacts"
WIN_TRENDS = "WinTrends"

PLAYER_HITTING = "PlayerHitting"
PLAYER_PITCHING = "PlayerPitching"
PLAYER_FIELDING = "PlayerFielding"

# Unit count: stored on the team, never as a metric value
GAMES_KEY = "G"


# ---------------------------------------------------------------------------
# MLB JSON field -> metric key
# ---------------------------------------------------------------------------

TEAM_HITTING_FIELDS = MappingProxyType({
    "gamesPlayed": GAMES_KEY,
    "atBats": "AB",
    "runs": "R",
    "hits": "H",
    "homeRuns": "HR",
    "doubles": "2B",
    "triples": "3B",
    "rbi": "RBI",
    "baseOnBalls": "BB",
    "strikeOuts": "SO",
    "stolenBases": "SB",
    "groundIntoDoublePlay": "GIDP",
    "caughtStealing": "CS",
    "sacBunts": "SAC",
    "sacFlies": "SF",
    "totalBases": "TB",
    "hitByPitch": "HBP",
    "atBatsPerHomeRun": "AB/HR",
})

TEAM_PITCHING_FIELDS = MappingProxyType({
    "era": "ERA",
    "shutouts": "SHO",
    "completeGames": "CG",
    "saves": "SV",
    "saveOpportunities": "SVO",
    "inningsPitched": "IP",
    "hits": "H",
    "runs": "R",
    "homeRuns": "HR",
    "wins": "W",
    "strikeOuts": "SO",
    "whip": "WHIP",
    "avg": "AVG",
    "battersFaced": "TBF",
    "numberOfPitches": "NP",
    "pitchesPerInning": "P/IP",
    "gamesFinished": "GF",
    "holds": "HLD",
    "intentionalWalks": "IBB",
    "wildPitches": "WP",
    "strikeoutWalkRatio": "K/BB",
})

PLAYER_HITTING_FIELDS = MappingProxyType({
    "gamesPlayed": "G",
    "atBats": "AB",
    "runs": "R",
    "hits": "H",
    "doubles": "2B",
    "triples": "3B",
    "homeRuns": "HR",
    "rbi": "RBI",
    "baseOnBalls": "BB",
    "strikeOuts": "SO",
    "stolenBases": "SB",
    "caughtStealing": "CS",
    "avg": "AVG",
    "obp": "OBP",
    "slg": "SLG",
    "ops": "OPS",
    "plateAppearances": "PA",
    "hitByPitch": "HBP",
    "sacBunts": "SAC",
    "sacFlies": "SF",
    "gidp": "GIDP",
    "groundOutsToAirouts": "GO/AO",
    "extraBaseHits": "XBH",
    "totalBases": "TB",
    "intentionalWalks": "IBB",
    "babip": "BABIP",
    "iso": "ISO",
    "atBatsPerHomeRun": "AB/HR",
    "walksPerStrikeout": "BB/K",
    "walksPerPlateAppearance": "BB%",
    "strikeoutsPerPlateAppearance": "SO%",
    "homeRunsPerPlateAppearance": "HR%",
})

PLAYER_PITCHING_FIELDS = MappingProxyType({
    "wins": "W",
    "losses": "L",
    "era": "ERA",
    "gamesPlayed": "G",
    "gamesStarted": "GS",
    "completeGames": "CG",
    "shutouts": "SHO",
    "saves": "SV",
    "saveOpportunities": "SVO",
    "inningsPitched": "IP",
    "runs": "R",
    "hits": "H",
    "earnedRuns": "ER",
    "homeRuns": "HR",
    "hitBatsmen": "HB",
    "baseOnBalls": "BB",
    "strikeOuts": "SO",
    "whip": "WHIP",
    "avg": "AVG",
    "battersFaced": "TBF",
    "numberOfPitches": "NP",
    "pitchesPerInning": "P/IP",
    "qualityStarts": "QS",
    "gamesFinished": "GF",
    "holds": "HLD",
    "intentionalWalks": "IBB",
    "wildPitches": "WP",
    "balks": "BK",
    "groundIntoDoublePlay": "GDP",
    "groundOutsToAirouts": "GO/AO",
    "strikeoutsPer9Inn": "SO/9",
    "walksPer9Inn": "BB/9",
    "hitsPer9Inn": "H/9",
    "strikeoutWalkRatio": "K/BB",
    "babip": "BABIP",
    "stolenBases": "SB",
    "caughtStealing": "CS",
    "pickoffs": "PK",
})


# ---------------------------------------------------------------------------
# TeamRankings page slugs (https://www.teamrankings.com/mlb/stat/<slug>)
# ---------------------------------------------------------------------------

TEAM_RANKINGS_HITTING = MappingProxyType({
    "AB": "at-bats-per-game",
    "R": "runs-per-game",
    "H": "hits-per-game",
    "HR": "home-runs-per-game",
    "S": "singles-per-game",
    "2B": "doubles-per-game",
    "3B": "triples-per-game",
    "RBI": "rbis-per-game",
    "BB": "walks-per-game",
    "SO": "strikeouts-per-game",
    "SB": "stolen-bases-per-game",
    "SBA": "stolen-bases-attempted-per-game",
    "CS": "caught-stealing-per-game",
    "SAC": "sacrifice-hits-per-game",
    "SF": "sacrifice-flys-per-game",
    "LOB": "left-on-base-per-game",
    "TLOB": "team-left-on-base-per-game",
    "HBP": "hit-by-pitch-per-game",
    "GIDP": "grounded-into-double-plays-per-game",
    "RLSP": "runners-left-in-scoring-position-per-game",
    "TB": "total-bases-per-game",
    "AVG": "batting-average",
    "SLG": "slugging-pct",
    "OBP": "on-base-pct",
    "OPS": "on-base-plus-slugging-pct",
    "AB/HR": "at-bats-per-home-run",
})

TEAM_RANKINGS_PITCHING = MappingProxyType({
    "OP/G": "outs-pitched-per-game",
    "ER/G": "earned-runs-per-game",
    "SO/9": "strikeouts-per-9",
    "H/9": "hits-per-9",
    "HR/9": "home-runs-per-9",
    "W/9": "walks-per-9",
})

TEAM_RANKINGS_FIELDING = MappingProxyType({
    "DP": "double-plays-per-game",
    "E": "errors-per-game",
})

# "O" + key is the same metric seen from the opponent's side
TEAM_RANKINGS_CURIOUS_FACTS = MappingProxyType({
    "YRFI": "yes-run-first-inning-pct",
    "NRFI": "no-run-first-inning-pct",
    "OYRFI": "opponent-yes-run-first-inning-pct",
    "ONRFI": "opponent-no-run-first-inning-pct",
    "1IR/G": "1st-inning-runs-per-game",
    "2IR/G": "2nd-inning-runs-per-game",
    "3IR/G": "3rd-inning-runs-per-game",
    "4IR/G": "4th-inning-runs-per-game",
    "5IR/G": "5th-inning-runs-per-game",
    "6IR/G": "6th-inning-runs-per-game",
    "7IR/G": "7th-inning-runs-per-game",
    "8IR/G": "8th-inning-runs-per-game",
    "9IR/G": "9th-inning-runs-per-game",
    "XTRAIR/G": "extra-inning-runs-per-game",
    "O1IR/G": "opponent-1st-inning-runs-per-game",
    "O2IR/G": "opponent-2nd-inning-runs-per-game",
    "O3IR/G": "opponent-3rd-inning-runs-per-game",
    "O4IR/G": "opponent-4th-inning-runs-per-game",
    "O5IR/G": "opponent-5th-inning-runs-per-game",
    "O6IR/G": "opponent-6th-inning-runs-per-game",
    "O7IR/G": "opponent-7th-inning-runs-per-game",
    "O8IR/G": "opponent-8th-inning-runs-per-game",
    "O9IR/G": "opponent-9th-inning-runs-per-game",
    "OXTRAIR/G": "opponent-extra-inning-runs-per-game",
    "F4IR/G": "first-4-innings-runs-per-game",
    "F5IR/G": "first-5-innings-runs-per-game",
    "F6IR/G": "first-6-innings-runs-per-game",
    "OF4IR/G": "opponent-first-4-innings-runs-per-game",
    "OF5IR/G": "opponent-first-5-innings-runs-per-game",
    "OF6IR/G": "opponent-first-6-innings-runs-per-game",
    "L2IR/G": "last-2-innings-runs-per-game",
    "L3IR/G": "last-3-innings-runs-per-game",
    "L4IR/G": "last-4-innings-runs-per-game",
    "OL2IR/G": "opponent-last-2-innings-runs-per-game",
    "OL3IR/G": "opponent-last-3-innings-runs-per-game",
    "OL4IR/G": "opponent-last-4-innings-runs-per-game",
})

OPPONENT_PREFIX = "O"

# Win-trend context -> query-string code
# (https://www.teamrankings.com/mlb/trends/win_trends/?sc=<code>)
TEAM_RANKINGS_WIN_TRENDS = MappingProxyType({
    "All Games": "all_games",
    "After Win": "is_after_win",
    "After Loss": "is_after_loss",
    "League Games": "is_league",
    "Non League Games": "non_league",
    "Division Games": "is_division",
    "Non Division Games": "non_division",
    "As Home": "is_home",
    "As Away": "is_away",
    "As Favorite": "is_fav",
    "As Underdog": "is_dog",
    "As Home Favorite": "is_home_fav",
    "As Home Underdog": "is_home_dog",
    "As Away Favorite": "is_away_fav",
    "As Away Underdog": "is_away_dog",
    "With No Rest": "no_rest",
    "1 Day Off": "one_day_off",
    "4+ Days Off": "four_plus_days_off",
    "Second Game of Doubleheader": "is_doubleheader",
    "With Rest Advantage": "rest_advantage",
    "With Rest Disadvantage": "rest_disadvantage",
    "Equal Rest": "equal_rest",
})

# The context whose record is also the team's overall record
OVERALL_WIN_TREND = "All Games"

# Per-game-only hitting metrics whose season total is games x current average
DERIVED_TOTAL_METRICS = frozenset({"S", "SBA", "LOB", "TLOB", "RLSP"})


# ---------------------------------------------------------------------------
# Baseball Almanac fielding tables
# ---------------------------------------------------------------------------

FIELDING_IDENTITY_KEY = "Name"
FIELDING_ROLE_KEY = "POS"

FIELDING_METRICS = ("OUTS", "TC", "CH", "PO", "A", "E", "DP", "PB", "CASB", "CACS", "FLD%")

FIELDING_HEADER_SYNONYMS = MappingProxyType({
    "Name": ("Name", "Player", "Player Name"),
    "POS": ("POS", "Pos", "Position"),
    "OUTS": ("OUTS", "Outs", "Inn Outs", "INN OUTS", "Inn (Outs)", "Innings (Outs)"),
    "TC": ("TC", "Total Chances", "Tot Ch", "T. Ch."),
    "CH": ("CH", "Ch", "Chances"),
    "PO": ("PO", "Putouts"),
    "A": ("A", "Assists"),
    "E": ("E", "Errors"),
    "DP": ("DP", "Double Plays"),
    "PB": ("PB", "Passed Balls"),
    "CASB": ("CASB", "SB"),
    "CACS": ("CACS", "CS"),
    "FLD%": ("FLD%", "Fld%", "FPCT", "Fld Pct", "Fielding %"),
})

# Rows whose identity cell reads like this end the data block
TABLE_SENTINELS = frozenset({"totals", "total", "team totals"})

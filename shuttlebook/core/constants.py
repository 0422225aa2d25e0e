"""Global constants for the shuttlebook application."""

# Collection names
PLAYERS_COLLECTION = "players"
SESSIONS_COLLECTION = "sessions"
SESSION_PLAYERS_COLLECTION = "session_players"

# Firestore allows 500 writes per batch; keep headroom
FIRESTORE_BATCH_LIMIT = 400

# Participant roles
ROLE_MASTER = "master"
ROLE_TEMPORARY = "temporary"

# Session defaults
DEFAULT_SERVICE_FEE = 0
DEFAULT_PER_MATCH_REWARD = 10

# Tiers, strongest first, with their minimum win rate
TIER_DIAMOND = "Diamond"
TIER_PLATINUM = "Platinum"
TIER_GOLD = "Gold"
TIER_SILVER = "Silver"
TIER_BRONZE = "Bronze"

TIER_THRESHOLDS = (
    (TIER_DIAMOND, 60),
    (TIER_PLATINUM, 55),
    (TIER_GOLD, 50),
    (TIER_SILVER, 45),
)

TIER_RANK = {
    TIER_DIAMOND: 5,
    TIER_PLATINUM: 4,
    TIER_GOLD: 3,
    TIER_SILVER: 2,
    TIER_BRONZE: 1,
}

UNKNOWN_PLAYER_NAME = "Unknown"

# Report kinds
REPORT_DAILY = "daily"
REPORT_RANGE = "range"

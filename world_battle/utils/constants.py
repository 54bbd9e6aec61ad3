"""Game configuration constants for World Battle."""

# Players
MIN_PLAYERS = 2
MAX_PLAYERS = 6
MAX_PLAYER_NAME_LENGTH = 20
CREATOR_PLAYER_ID = "player-1"

# Total armies each player starts with, keyed by player count
INITIAL_ARMIES = {
    2: 40,
    3: 35,
    4: 30,
    5: 25,
    6: 20,
}

# Reinforcements
MIN_TERRITORY_BONUS = 3
TERRITORIES_PER_BONUS_ARMY = 3

# Combat
DIE_SIDES = 6
MAX_ATTACKER_DICE = 3
MAX_DEFENDER_DICE = 2
MIN_ATTACKING_ARMIES = 2

# Cards
MIN_TRADE_SET_SIZE = 3
MAX_SUGGESTED_SET_SIZE = 5
MANDATORY_TRADE_HAND_SIZE = 5

# Lobby
GAME_CODE_LENGTH = 4
GAME_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"  # No I, O, 0, 1

# Testing
RNG_SEED_DEFAULT = 42  # Default seed for testing

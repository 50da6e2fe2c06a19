"""Game constants for Decree Duel."""

# Deck layout
DECK_SIZE = 33
MIN_RANK = 1
MAX_RANK = 11
HAND_SIZE = 13
DECREE_POSITION = 2 * HAND_SIZE  # 27th card of the deal
NUM_PLAYERS = 2

# Round structure
TRICKS_PER_ROUND = 13
WIN_THRESHOLD = 21

# Ability ranks
SWAN_RANK = 1
FOX_RANK = 3
WOODCUTTER_RANK = 5
TREASURE_RANK = 7
WITCH_RANK = 9
MONARCH_RANK = 11

# Target bands (tricks won)
LOW_BAND_MAX = 3
HIGH_BAND_MIN = 7
HIGH_BAND_MAX = 9
GREEDY_MIN = 10

# Evaluator weights
RANK_WEIGHT = 0.3
TRUMP_BONUS = 0.2
ABILITY_WEIGHT = 0.3
FOLLOW_BONUS = 0.2

# Share of the remaining tricks a player is assumed unable to dodge
UNAVOIDABLE_TRICK_SHARE = 0.25

# Leading trump at or above this rank is assumed to win
STRONG_LEAD_RANK = 7

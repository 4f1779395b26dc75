"""Blackjack-specific constants and value mappings."""

from fairjack.common.card import Rank

# Card values with the Ace counted high
BLACKJACK_VALUES = {rank: rank.rank_value for rank in Rank}

BLACKJACK = 21
ACE_REDUCTION = 10
DEALER_STAND_TOTAL = 17

# A round may hold at most this many hands after splitting
MAX_HANDS = 4

# Payout multipliers applied to a hand's stake; the total is floored
WIN_MULTIPLIER = 2
BLACKJACK_NUMERATOR = 5
BLACKJACK_DENOMINATOR = 2

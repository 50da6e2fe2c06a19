"""Bot AI players for Decree Duel.

Available bots:
- RandomBot: Plays random legal cards (Easy)
- RuleBasedBot: Evaluator-driven play (Medium and Hard)
"""

import random

from decree.bots.base_bot import BaseBot, BotDifficulty
from decree.bots.random_bot import RandomBot
from decree.bots.rule_based_bot import RuleBasedBot
from decree.bots.strategies import STRATEGIES


def create_bot(
    player_id: int,
    difficulty: BotDifficulty | str = BotDifficulty.MEDIUM,
    rng: random.Random | None = None,
) -> BaseBot:
    """Create the bot class matching a difficulty."""
    difficulty = BotDifficulty(difficulty)
    if difficulty == BotDifficulty.EASY:
        return RandomBot(player_id, rng=rng)
    return RuleBasedBot(player_id, difficulty, rng)


__all__ = ["STRATEGIES", "BaseBot", "BotDifficulty", "RandomBot", "RuleBasedBot", "create_bot"]

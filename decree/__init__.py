"""Decree Duel: rules engine and opponent AI for a two-player trick-taking game."""

__version__ = "1.0.0"

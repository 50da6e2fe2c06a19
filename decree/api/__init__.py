"""HTTP surface for driving human-versus-bot matches."""

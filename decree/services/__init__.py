"""Services around the rules engine: serialization, events and match sessions."""

"""Top-level pcp commands (auto-discovered by the dispatcher)."""

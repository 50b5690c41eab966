"""pcp core: composition engine, configuration and shared utilities."""

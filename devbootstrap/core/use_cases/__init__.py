"""Use cases — step sequences invoked by the CLI."""

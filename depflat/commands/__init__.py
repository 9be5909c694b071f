"""CLI subcommands for depflat."""

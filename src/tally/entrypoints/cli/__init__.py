"""Command-line interface for TALLY."""

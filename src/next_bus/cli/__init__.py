"""Command line interface for next bus lookups."""

"""Command line interface for tabkeeper."""

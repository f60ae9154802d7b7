"""Command-line interface for gitsnip."""

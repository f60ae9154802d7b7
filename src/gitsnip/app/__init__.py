"""Application layer for gitsnip."""

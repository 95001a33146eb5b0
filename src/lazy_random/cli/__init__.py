"""Command line interface for lazy-random."""

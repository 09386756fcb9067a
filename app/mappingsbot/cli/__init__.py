"""Command-line interface for mappingsbot."""

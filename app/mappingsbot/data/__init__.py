"""Bundled data files for mappingsbot."""

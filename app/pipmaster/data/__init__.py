"""Bundled data files for pipmaster."""

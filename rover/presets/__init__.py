"""Bundled default settings for rover."""

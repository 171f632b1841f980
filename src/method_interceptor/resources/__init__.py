"""Packaged resource files."""

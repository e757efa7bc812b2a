"""Packaged resources (message catalog bundles)."""

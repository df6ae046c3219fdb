"""Packaged static data."""

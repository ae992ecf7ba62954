"""Slice rendering."""

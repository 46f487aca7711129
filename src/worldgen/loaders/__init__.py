"""Readers for the text formats the map files use."""

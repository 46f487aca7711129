"""Typed loader and cross-validator for Hearts of Iron IV style map directories."""

__version__ = "0.2.0"

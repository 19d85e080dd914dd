"""Attribute info database, value encoding, target names and dump text formats."""

__version__ = "0.1.0"
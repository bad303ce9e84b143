"""Concatenate source trees into a single annotated text file."""

__version__ = "1.2.1"

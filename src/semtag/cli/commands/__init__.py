"""Implementations of the semtag commands."""

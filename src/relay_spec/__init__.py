"""Executable specification of a Bitcoin header relay."""

"""Subspecifications of the relay, leaf components first."""

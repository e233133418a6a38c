"""Synthetic load generator for a remote user-account service."""

__version__ = "0.1.0"

"""Typed client for the environmental data service."""

__version__ = "0.1.0"

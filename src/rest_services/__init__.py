"""Declarative REST client factory with a per-service event bus."""

__version__ = "0.1.0"

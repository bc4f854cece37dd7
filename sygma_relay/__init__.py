"""Relayer building blocks: peer message types, subscriptions and substrate event handling."""

__version__ = "0.1.0"
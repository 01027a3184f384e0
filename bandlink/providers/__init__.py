"""Concrete adapters for the interfaces in ``bandlink.interfaces``."""

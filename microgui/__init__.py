"""Immediate-mode user-interface library producing a list of draw commands."""

__version__ = "2.1.0"
__all__ = ["types", "pool", "context", "controls", "containers"]
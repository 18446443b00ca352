"""Procedural flow-field background rendered with moderngl."""

__version__ = "0.1.0"

"""Musive daily music news digest."""

__version__ = "0.1.0"

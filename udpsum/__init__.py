"""Reliable number aggregation over UDP with broadcast server discovery."""

__version__ = "0.1.0"
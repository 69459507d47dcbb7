"""Minutebook: meeting series, minutes and the topic ledger."""

__version__ = "0.1.0"

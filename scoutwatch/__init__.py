"""Scoutwatch — perception-to-notification monitor for agents in a polled world."""

__version__ = "0.1.0"

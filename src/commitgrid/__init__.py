"""Windowed commit history table for Qt views."""

__version__ = "0.1.0"

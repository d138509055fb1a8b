"""Tiered retention policing for timestamped backups."""

__version__ = "1.0.0"

"""Hostel upkeep backend: cleaning logs, workers and maintenance issues per hostel."""

__version__ = "0.1.0"

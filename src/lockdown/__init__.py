"""LOCKDOWN - searchlight yard simulation core."""

__version__ = "0.1.0"

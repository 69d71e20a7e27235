"""Availability-slot scheduling core for the doctor booking platform."""

__version__ = "0.1.0"

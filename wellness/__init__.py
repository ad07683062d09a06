"""Wellness tracker: mood logging, guided activities and progression"""

__version__ = "1.0.0"

"""
Midnight Corruption tracker.

Tracks per-character corruption levels, corruption checks, and the minor
and major mutations they trigger.
"""

__version__ = "0.1.0"

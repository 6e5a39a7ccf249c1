"""
fit-scheduler: adaptive weekly workout program generator.

Builds full-body or push/pull/legs weeks from an exercise catalog, adapts
them to logged session feedback and spreads them over the calendar.
"""

__version__ = "0.1.0"

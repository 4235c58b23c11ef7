"""sweepctl - Scheduled expiry sweeper for Markdown vault folders."""

__version__ = "0.1.0"

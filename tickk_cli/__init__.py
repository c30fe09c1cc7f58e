"""Rule-based classification of captured utterances into tasks, calendar events and notes."""

__version__ = "0.1.0"

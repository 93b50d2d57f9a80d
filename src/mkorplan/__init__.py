"""MKOR fleet scheduling: staged unit timelines, availability checks and job planning."""

__version__ = "0.1.0"

"""Client for the crackwatch.com games listing."""

__version__ = "0.1.0"

"""Progress trackers rendered as live, styled progress bars in the terminal."""

__version__ = "0.1.0"
"""orderentry — order validation and placement workflow."""

__version__ = "0.1.0"

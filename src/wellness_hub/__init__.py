"""wellness-hub: AI-generated workout and meal plans."""

__version__ = "0.1.0"

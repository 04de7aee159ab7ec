"""Coach.ai - workout tracking profile engine."""

__version__ = "1.0.0"

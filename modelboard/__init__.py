"""modelboard - evaluation metrics dashboard for machine learning models."""

__version__ = "0.1.0"

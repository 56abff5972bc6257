"""API clients and decision helpers for tracking and copying prediction-market whales."""

__version__ = "0.1.0"
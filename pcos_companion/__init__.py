"""PCOS Companion - profile, food-analysis history and AI chat engine."""

__version__ = "1.0.0"

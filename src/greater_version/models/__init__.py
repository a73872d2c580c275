"""Data models for the greater-version package."""

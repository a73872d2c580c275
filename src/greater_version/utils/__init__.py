"""Utilities for the greater-version package."""

"""Utility functions and helpers package."""

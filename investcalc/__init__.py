"""Compound growth and average purchase price calculators."""

__version__ = "0.1.0"

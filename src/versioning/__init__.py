"""Precision and version models and parsers."""

"""Puma cluster status reporter."""

__version__ = "0.1.0"

"""MrLister: product identity and marketplace export engine."""

__version__ = "0.1.0"

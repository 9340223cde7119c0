"""pizzeria: catalogue-and-ordering domain engine for a pizza shop."""

__version__ = "0.1.0"

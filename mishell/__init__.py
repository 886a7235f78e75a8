"""mishell - a small line-oriented command interpreter."""

__version__ = "0.1.0"

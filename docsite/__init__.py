"""Static HTML documentation site generator."""

__version__ = "1.1.6"

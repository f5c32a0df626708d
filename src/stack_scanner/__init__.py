"""Secret and stack misconfiguration scanner."""

__version__ = "0.1.0"

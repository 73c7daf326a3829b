"""Health evaluation and values composition for the multicluster observability addon."""

__version__ = "0.1.0"

"""CT stowage sorter: reorder CT monitoring blocks into Bay-Row-Tier order."""

__version__ = "0.1.0"

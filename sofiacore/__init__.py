"""Parameter sets, output paths, numeric text tables and an index stack for source finding."""

__version__ = "0.1.0"
__all__ = ["parameter", "path", "stack", "table"]
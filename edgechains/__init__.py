"""Edge-point chains: a bounded chain store, fusion, angular sampling, segment features and orientation."""

__version__ = "0.1.0"
__all__ = ["chain", "fusion", "sampling", "segments", "orientation", "selection"]
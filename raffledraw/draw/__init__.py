"""Weighted draw engine."""

from .engine import WeightedDrawEngine, eligible_subset

__all__ = [
    "WeightedDrawEngine",
    "eligible_subset",
]

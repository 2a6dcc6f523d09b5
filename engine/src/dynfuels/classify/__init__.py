"""Fuel classification engine."""

from dynfuels.classify.dead_fir import calculate_percent_dead_fir
from dynfuels.classify.engine import classify

__all__ = ["calculate_percent_dead_fir", "classify"]

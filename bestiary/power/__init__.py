"""
Power evaluation module.

This module estimates damage and effective hit points for every monster,
aggregates them per depth and normalizes power against the depth averages.
"""

from .aggregates import DepthAggregator, DepthContribution, population_count
from .curves import derive_experience, derive_level, derive_rarity, round_experience
from .damage import DamageEstimator
from .dump import format_power_row, write_power_dump
from .normalizer import (
    PowerNormalizer,
    PowerReport,
    evaluate_bestiary_power,
    group_power,
)
from .toughness import ToughnessEstimator

__all__ = [
    # Import from aggregates.py
    "DepthAggregator",
    "DepthContribution",
    "population_count",
    # Import from curves.py
    "derive_experience",
    "derive_level",
    "derive_rarity",
    "round_experience",
    # Import from damage.py
    "DamageEstimator",
    # Import from dump.py
    "format_power_row",
    "write_power_dump",
    # Import from normalizer.py
    "PowerNormalizer",
    "PowerReport",
    "evaluate_bestiary_power",
    "group_power",
    # Import from toughness.py
    "ToughnessEstimator",
]

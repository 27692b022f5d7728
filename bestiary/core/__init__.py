"""
Core system module for the bestiary power evaluator.

This module contains the fundamental components shared by the evaluation:
game constants, the speed table, dice and formula evaluation, projection
tables, logging and error handling.

Loading, configuration and report printing live in their own modules
(content, config, sheets) and are imported from there directly.
"""

from .constants import (
    MAX_DEPTH,
    MAX_LEVEL,
    POWER_PASSES,
    Aspect,
    BlowEffect,
    BlowMethod,
    Element,
    MonsterFlag,
    SpellFlag,
)
from .dice_parser import (
    VarInfo,
    dice_maximum,
    evaluate_expression,
    get_max_roll,
    get_roll,
)
from .error_handling import (
    ERROR_HANDLER,
    ErrorSeverity,
    PowerEvaluationError,
    PowerStatus,
)
from .logging import setup_logging
from .projections import BREATHS, SPELLS, resist_adjust
from .speed import DEFAULT_SPEED_TABLE, SpeedTable
from .utils import cprint, crule

__all__ = [
    # Import from constants.py
    "MAX_DEPTH",
    "MAX_LEVEL",
    "POWER_PASSES",
    "Aspect",
    "BlowEffect",
    "BlowMethod",
    "Element",
    "MonsterFlag",
    "SpellFlag",
    # Import from dice_parser.py
    "VarInfo",
    "dice_maximum",
    "evaluate_expression",
    "get_max_roll",
    "get_roll",
    # Import from error_handling.py
    "ERROR_HANDLER",
    "ErrorSeverity",
    "PowerEvaluationError",
    "PowerStatus",
    # Import from logging.py
    "setup_logging",
    # Import from projections.py
    "BREATHS",
    "SPELLS",
    "resist_adjust",
    # Import from speed.py
    "DEFAULT_SPEED_TABLE",
    "SpeedTable",
    # Import from utils.py
    "cprint",
    "crule",
]

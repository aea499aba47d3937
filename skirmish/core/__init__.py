"""
Core system module for the skirmish engine.

This module contains the fundamental components shared by every other part of
the engine: constants and enumerations, combat settings, the seeded random
generator, logging helpers and error handling.
"""

from .constants import (
    BASE_RANGE,
    DEFAULT_STEP,
    UNARMED_NAME,
    EventKind,
    NiceEnum,
    OutcomeKind,
    OutOfRangeReason,
    ResolutionKind,
    WeaponSlot,
)
from .error_handling import (
    ERROR_HANDLER,
    ErrorHandler,
    ErrorSeverity,
    GameError,
    InvalidConfiguration,
)
from .rng import SeededRandom
from .settings import DEFAULT_SETTINGS, CombatSettings

__all__ = [
    # Import from constants.py
    "BASE_RANGE",
    "DEFAULT_STEP",
    "UNARMED_NAME",
    "EventKind",
    "NiceEnum",
    "OutcomeKind",
    "OutOfRangeReason",
    "ResolutionKind",
    "WeaponSlot",
    # Import from error_handling.py
    "ERROR_HANDLER",
    "ErrorHandler",
    "ErrorSeverity",
    "GameError",
    "InvalidConfiguration",
    # Import from rng.py
    "SeededRandom",
    # Import from settings.py
    "DEFAULT_SETTINGS",
    "CombatSettings",
]

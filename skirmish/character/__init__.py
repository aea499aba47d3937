"""
Character module for the skirmish engine.

This module defines the fighter entity together with the buffs and poison it
can carry during a combat.
"""

from .character_effects import Buff, Poison
from .main import Fighter

__all__ = [
    # Import from character_effects.py
    "Buff",
    "Poison",
    # Import from main.py
    "Fighter",
]

"""
Items module for the skirmish engine.

This module contains equipment and consumable definitions: weapons and their
quivers, shields, armor, boots, potions and food.
"""

from .armor import Armor, Shield
from .boots import Boots
from .consumable import (
    AntidoteEffect,
    AttackEffect,
    Consumable,
    EnduranceEffect,
    EvasionEffect,
    Food,
    HealEffect,
    Potion,
    PotionEffect,
)
from .weapon import PoisonCoating, Quiver, Weapon

__all__ = [
    "Armor",
    "Shield",
    "Boots",
    "AntidoteEffect",
    "AttackEffect",
    "Consumable",
    "EnduranceEffect",
    "EvasionEffect",
    "Food",
    "HealEffect",
    "Potion",
    "PotionEffect",
    "PoisonCoating",
    "Quiver",
    "Weapon",
]

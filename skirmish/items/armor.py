"""
Armor module for the skirmish engine.

Defines shields, which may block a whole hit, and body armor, which absorbs a
share of every hit until its durability runs out.
"""

import math
from typing import Any

from pydantic import BaseModel, Field

from ..core.logging import log_debug


class Shield(BaseModel):
    """
    A shield that fully absorbs the hits it blocks.

    The chance to block grows with the tier: each tier adds a fixed percentage,
    clamped between 0 and 100.
    """

    durability: int = Field(
        default=100,
        description="Damage the shield can still absorb before breaking.",
        ge=0,
    )
    tier: int = Field(
        default=0,
        description="Quality tier driving the block chance.",
        ge=0,
    )

    def is_broken(self) -> bool:
        return self.durability <= 0

    def block_chance(self, chance_per_tier: int = 20) -> int:
        """
        Returns the block chance in percent.

        Args:
            chance_per_tier (int): Percent of block chance granted per tier.

        Returns:
            int: The block chance, clamped to [0, 100].

        """
        return max(0, min(100, chance_per_tier * self.tier))

    def absorb(self, damage: float) -> bool:
        """
        Absorb a blocked hit, wearing the shield down by the rounded damage.

        Args:
            damage (float): The damage of the blocked hit.

        Returns:
            bool: False if the shield was already broken, True otherwise.

        """
        if self.is_broken():
            return False
        # Round half away from zero, damage is never negative.
        self.durability -= int(math.floor(damage + 0.5))
        if self.durability <= 0:
            self.durability = 0
            log_debug("Shield broke", {"damage": damage})
        return True


class Armor(BaseModel):
    """
    Body armor absorbing a fixed share of incoming damage.

    Each absorbed hit costs the armor the absorbed amount, rounded up, in
    durability. Broken armor lets all damage through.
    """

    name: str = Field(
        default="Light armor",
        description="The name of the armor.",
    )
    durability: int = Field(
        default=40,
        description="Durability points left.",
        ge=0,
    )
    damage_reduction: float = Field(
        default=0.10,
        description="Share of incoming damage absorbed by the armor.",
        ge=0.0,
        lt=1.0,
    )

    def model_post_init(self, _: Any) -> None:
        assert self.name and isinstance(self.name, str), "Armor name must not be empty."

    @classmethod
    def light(cls) -> "Armor":
        return cls(name="Light armor", durability=40, damage_reduction=0.10)

    @classmethod
    def iron(cls) -> "Armor":
        return cls(name="Iron armor", durability=80, damage_reduction=0.25)

    @classmethod
    def scale(cls) -> "Armor":
        return cls(name="Scale armor", durability=120, damage_reduction=0.40)

    def is_broken(self) -> bool:
        return self.durability <= 0

    def absorb(self, damage: float) -> float:
        """
        Absorb part of the incoming damage and wear the armor down.

        Args:
            damage (float): The incoming damage.

        Returns:
            float: The damage left after absorption.

        """
        if self.is_broken():
            return damage
        absorbed = damage * self.damage_reduction
        self.durability -= math.ceil(absorbed)
        if self.durability <= 0:
            self.durability = 0
            log_debug(f"{self.name} is destroyed", {"absorbed": absorbed})
        return damage - absorbed

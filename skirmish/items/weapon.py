"""
Weapon module for the skirmish engine.

Defines weapons, the quivers that feed ranged weapons, and the poison coating
a weapon may carry.
"""

import math
from typing import Any

from pydantic import BaseModel, Field


class Quiver(BaseModel):
    """
    Ammunition holder of a ranged weapon.

    A quiver with `arrows` set to None holds infinite ammunition: it is never
    decremented and never counted in ammunition totals.
    """

    arrows: int | None = Field(
        default=None,
        description="Arrows left in the quiver, None for infinite ammunition.",
        ge=0,
    )
    capacity: int | None = Field(
        default=None,
        description="Maximum number of arrows, defaults to the initial count.",
        ge=0,
    )

    def model_post_init(self, _: Any) -> None:
        if self.arrows is None:
            self.capacity = None
            return
        if self.capacity is None:
            self.capacity = self.arrows
        if self.capacity < self.arrows:
            raise ValueError("Quiver capacity cannot be lower than its arrow count.")

    def is_infinite(self) -> bool:
        return self.arrows is None

    def has_arrows(self) -> bool:
        return self.arrows is None or self.arrows > 0

    def consume_arrow(self) -> bool:
        """
        Take one arrow out of the quiver.

        Returns:
            bool: False if the quiver was empty, True otherwise.

        """
        if self.arrows is None:
            return True
        if self.arrows <= 0:
            return False
        self.arrows -= 1
        return True

    def restore(self, ratio: float, flat: int = 0) -> int:
        """
        Put arrows back into the quiver, never beyond its capacity.

        Args:
            ratio (float): Share of the capacity to restore.
            flat (int): Extra arrows added on top of the ratio.

        Returns:
            int: The number of arrows actually restored.

        """
        if self.arrows is None or self.capacity is None:
            return 0
        missing = self.capacity - self.arrows
        if missing <= 0:
            return 0
        amount = math.ceil(self.capacity * max(0.0, ratio)) + max(0, flat)
        amount = min(amount, missing)
        self.arrows += amount
        return amount


class PoisonCoating(BaseModel):
    """Poison applied to the defender when a coated weapon deals damage."""

    damage_per_turn: float = Field(
        description="Damage dealt at the start of each of the victim's turns.",
        gt=0,
    )
    turns: int = Field(
        description="Number of turns the poison lasts.",
        ge=1,
    )


class Weapon(BaseModel):
    """
    Represents a weapon held in the primary or secondary hand.

    Melee weapons always have ammunition. Ranged weapons draw from their quiver,
    and a ranged weapon without a quiver shoots forever.
    """

    name: str = Field(
        description="The name of the weapon.",
    )
    damage: float = Field(
        description="Damage dealt by a hit, before buffs and mitigation.",
        ge=0,
    )
    range: float = Field(
        default=1.0,
        description="Maximum distance at which the weapon can hit.",
        ge=0,
    )
    is_melee: bool = Field(
        default=True,
        description="Whether the weapon is a melee weapon.",
    )
    quiver: Quiver | None = Field(
        default=None,
        description="Ammunition source of a ranged weapon.",
    )
    poison: PoisonCoating | None = Field(
        default=None,
        description="Optional poison applied on damaging hits.",
    )

    def model_post_init(self, _: Any) -> None:
        assert self.name and isinstance(self.name, str), "Weapon name must not be empty."

    @classmethod
    def melee(cls, name: str, damage: float, range: float = 1.0) -> "Weapon":
        return cls(name=name, damage=damage, range=range, is_melee=True)

    @classmethod
    def ranged(
        cls,
        name: str,
        damage: float,
        range: float,
        arrows: int | None = None,
    ) -> "Weapon":
        return cls(
            name=name,
            damage=damage,
            range=range,
            is_melee=False,
            quiver=Quiver(arrows=arrows),
        )

    def has_ammo(self) -> bool:
        if self.is_melee or self.quiver is None:
            return True
        return self.quiver.has_arrows()

    def consume_ammo(self) -> bool:
        if self.is_melee or self.quiver is None:
            return True
        return self.quiver.consume_arrow()

    def has_finite_ammo(self) -> bool:
        """Whether this weapon's ammunition is tracked and can run out."""
        return (
            not self.is_melee
            and self.quiver is not None
            and not self.quiver.is_infinite()
        )

    def remaining_ammo(self) -> int | None:
        """Arrows left, or None when the weapon has no finite ammunition."""
        if not self.has_finite_ammo():
            return None
        assert self.quiver is not None
        return self.quiver.arrows

    def restore_ammo(self, ratio: float, flat: int = 0) -> int:
        if not self.has_finite_ammo():
            return 0
        assert self.quiver is not None
        return self.quiver.restore(ratio, flat)

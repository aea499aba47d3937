"""
Attack outcome module for the skirmish engine.

An attack always resolves to exactly one of the outcome variants defined here.
Being out of range, out of ammunition, blocked or dodged are regular results,
not errors, and callers are expected to handle every variant.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

from ..core.constants import OutcomeKind, OutOfRangeReason, WeaponSlot


class WeaponInfo(BaseModel):
    """Describes the weapon an attack was attempted with."""

    name: str = Field(
        description="The name of the weapon, or the unarmed label.",
    )
    slot: WeaponSlot = Field(
        description="The hand the weapon is held in.",
    )
    is_melee: bool = Field(
        default=True,
        description="Whether the weapon is a melee weapon.",
    )


class BaseOutcome(BaseModel):
    """Common behaviour of every outcome variant."""

    kind: OutcomeKind

    def to_payload(self) -> dict[str, Any]:
        """Returns the outcome as a JSON-friendly dictionary, without its kind."""
        return self.model_dump(mode="json", exclude={"kind"})


class OutOfRange(BaseOutcome):
    """The target is beyond the reach of every usable weapon."""

    kind: Literal[OutcomeKind.OUT_OF_RANGE] = OutcomeKind.OUT_OF_RANGE

    reason: OutOfRangeReason = Field(
        description="Whether distance or missing ammunition prevented the attack.",
    )
    distance: float = Field(
        description="Distance to the target when the attack was attempted.",
    )
    weapon: WeaponInfo | None = Field(
        default=None,
        description="The weapon that could have been used, if any.",
    )
    should_move: bool = Field(
        description="Whether the attacker should step towards the target.",
    )


class NoAmmo(BaseOutcome):
    """A weapon could reach the target but had nothing left to shoot."""

    kind: Literal[OutcomeKind.NO_AMMO] = OutcomeKind.NO_AMMO

    weapon: WeaponInfo
    ammo_remaining: int = 0


class Blocked(BaseOutcome):
    """The defender's shield absorbed the whole hit."""

    kind: Literal[OutcomeKind.BLOCKED] = OutcomeKind.BLOCKED

    weapon: WeaponInfo
    shield_durability: int
    ammo_remaining: int | None = None


class Dodged(BaseOutcome):
    """The defender avoided the hit."""

    kind: Literal[OutcomeKind.DODGED] = OutcomeKind.DODGED

    weapon: WeaponInfo
    ammo_remaining: int | None = None


class Damage(BaseOutcome):
    """The hit landed, with the breakdown of every mitigation applied."""

    kind: Literal[OutcomeKind.DAMAGE] = OutcomeKind.DAMAGE

    weapon: WeaponInfo
    raw_damage: float = Field(
        description="Damage after attack buffs, before any mitigation.",
    )
    armor_reduction: float = Field(
        default=0.0,
        description="Damage absorbed by the defender's armor.",
    )
    boots_reduction: float = Field(
        default=0.0,
        description="Damage removed by the defender's boots.",
    )
    damage: float = Field(
        description="Damage actually subtracted from the defender's health.",
    )
    ammo_remaining: int | None = None
    poisoned: bool = Field(
        default=False,
        description="Whether the weapon's coating poisoned the defender.",
    )


AttackOutcome = OutOfRange | NoAmmo | Blocked | Dodged | Damage

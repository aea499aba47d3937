"""
Combat settings module for the skirmish engine.

Groups the tunable numbers of the resolution pipeline and of the consumable
agent in a single validated model. The defaults reproduce the reference rules.
"""

from typing import Any

from pydantic import BaseModel, Field

from .constants import BASE_RANGE, DEFAULT_STEP


class CombatSettings(BaseModel):
    """
    Tunable parameters for a combat run.
    """

    max_rounds: int | None = Field(
        default=1000,
        description=(
            "Maximum number of rounds before the combat is declared a "
            "stalemate. None disables the cap."
        ),
        ge=1,
    )
    base_range: float = Field(
        default=BASE_RANGE,
        description="Reach of an unarmed attack.",
        gt=0,
    )
    default_step: float = Field(
        default=DEFAULT_STEP,
        description="Distance covered by one move before modifiers.",
        gt=0,
    )
    unarmed_damage_min: int = Field(
        default=1,
        description="Minimum damage of a bare-handed hit.",
        ge=0,
    )
    unarmed_damage_max: int = Field(
        default=5,
        description="Maximum damage of a bare-handed hit.",
        ge=0,
    )
    block_chance_per_tier: int = Field(
        default=20,
        description="Block chance granted by each shield tier, in percent.",
        ge=0,
    )
    base_dodge_chance: float = Field(
        default=5.0,
        description="Dodge chance every fighter has, in percent.",
        ge=0,
    )
    max_dodge_chance: float = Field(
        default=95.0,
        description="Upper bound of the dodge chance, in percent.",
        ge=0,
        le=100,
    )
    critical_health: float = Field(
        default=30.0,
        description="Health points at or below which emergency healing kicks in.",
        ge=0,
    )
    low_health: float = Field(
        default=50.0,
        description="Health points at or below which moderate healing kicks in.",
        ge=0,
    )
    low_ammo_threshold: int = Field(
        default=3,
        description="Total finite ammo at or below which ammo is restored.",
        ge=0,
    )

    def model_post_init(self, _: Any) -> None:
        if self.unarmed_damage_min > self.unarmed_damage_max:
            raise ValueError(
                "unarmed_damage_min must not be greater than unarmed_damage_max."
            )
        if self.critical_health > self.low_health:
            raise ValueError("critical_health must not be greater than low_health.")


DEFAULT_SETTINGS = CombatSettings()

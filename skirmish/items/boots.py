"""
Boots module for the skirmish engine.

Boots are permanent equipment without durability that tweak movement speed,
damage resistance and dodge chance.
"""

from pydantic import BaseModel, Field


class Boots(BaseModel):
    """
    Represents a pair of boots.

    All bonuses are fractions: a movement bonus of 0.5 makes every step 50%
    longer, a resistance bonus of 0.1 removes 10% of the damage left after
    armor, and a dodge bonus of 0.2 adds 20 points to the dodge chance.
    """

    name: str = Field(
        default="Boots",
        description="The name of the boots.",
    )
    movement_bonus: float = Field(
        default=0.0,
        description="Movement multiplier modifier, may be negative.",
    )
    resistance_bonus: float = Field(
        default=0.0,
        description="Share of damage removed after armor.",
        ge=0.0,
        le=1.0,
    )
    dodge_bonus: float = Field(
        default=0.0,
        description="Dodge chance bonus as a fraction.",
        ge=0.0,
    )

    @classmethod
    def running(cls) -> "Boots":
        return cls(name="Running boots", movement_bonus=0.50)

    @classmethod
    def heavy(cls) -> "Boots":
        return cls(name="Heavy boots", movement_bonus=-0.20, resistance_bonus=0.10)

    @classmethod
    def silent(cls) -> "Boots":
        return cls(name="Silent boots", dodge_bonus=0.20)

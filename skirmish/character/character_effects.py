"""
Character effects module for the skirmish engine.

Temporary buffs and poison carried by a fighter. A buff stacks its magnitude
but not its duration; poison never stacks and is simply replaced.
"""

from pydantic import BaseModel, Field


class Buff(BaseModel):
    """
    A temporary percent-magnitude, turn-duration modifier.

    Once the remaining turns reach zero the buff resets to {0, 0}.
    """

    percent: float = Field(
        default=0.0,
        description="Magnitude of the buff as a fraction.",
        ge=0.0,
    )
    turns: int = Field(
        default=0,
        description="Remaining turns before the buff expires.",
        ge=0,
    )

    def is_active(self) -> bool:
        return self.turns > 0

    def stack(self, percent: float, turns: int) -> None:
        """
        Add a new application on top of the current one.

        Args:
            percent (float): Magnitude added to the current one.
            turns (int): New duration, kept only if longer than the current one.
                An application without duration on an idle buff is ignored.

        """
        turns = max(self.turns, turns)
        if turns <= 0:
            # Nothing to hold the magnitude, the buff stays at rest.
            self.reset()
            return
        self.percent += max(0.0, percent)
        self.turns = turns

    def consume_turn(self) -> None:
        """Spend one turn of the buff, resetting it when it runs out."""
        if self.turns <= 0:
            return
        self.turns -= 1
        if self.turns == 0:
            self.reset()

    def reset(self) -> None:
        self.percent = 0.0
        self.turns = 0


class Poison(BaseModel):
    """A damage-over-time effect counting down at the start of each turn."""

    damage_per_turn: float = Field(
        description="Damage dealt at every tick.",
        ge=0.0,
    )
    turns_remaining: int = Field(
        description="Ticks left before the poison wears off.",
        ge=0,
    )

    def tick(self) -> float:
        """
        Spend one turn of poison.

        Returns:
            float: The damage to apply for this tick.

        """
        self.turns_remaining = max(0, self.turns_remaining - 1)
        return self.damage_per_turn

    def is_expired(self) -> bool:
        return self.turns_remaining <= 0

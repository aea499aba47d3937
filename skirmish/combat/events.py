"""
Event system module for the skirmish engine.

A combat produces an ordered stream of structured events. Actors and targets
are referenced by name so that two runs can be compared event by event.
"""

from typing import Any, Callable

from pydantic import BaseModel, Field

from ..core.constants import EventKind


class CombatEvent(BaseModel):
    """A single thing that happened during a combat."""

    kind: EventKind = Field(
        description="The kind of event.",
    )
    actor: str | None = Field(
        default=None,
        description="Name of the fighter the event is about, None for combat-wide events.",
    )
    target: str | None = Field(
        default=None,
        description="Name of the other fighter involved, if any.",
    )
    round: int = Field(
        default=0,
        description="Round during which the event happened, stamped by the combat.",
        ge=0,
    )
    payload: dict[str, Any] = Field(
        default_factory=dict,
        description="Kind-specific data.",
    )

    def __str__(self) -> str:
        """
        String representation of the CombatEvent.

        Returns:
            str:
                Formatted string representing the CombatEvent.
        """
        actor = self.actor or ""
        target = f" -> {self.target}" if self.target else ""
        return f"{self.kind.emoji} [{self.round}] {self.kind}({actor}{target}) {self.payload}"


EventListener = Callable[[CombatEvent], None]

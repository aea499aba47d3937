"""
Constants and enumerations for the skirmish engine.

Defines the global combat constants and the enumerations used to tag attack
outcomes, combat events, weapon slots and the way a combat was resolved.
"""

from enum import Enum

# Reach of a bare-handed attack, in line units.
BASE_RANGE = 1.0

# Distance covered by a single step before buffs and boots are applied.
DEFAULT_STEP = 1.0

# Label used in outcomes when a fighter attacks without a weapon.
UNARMED_NAME = "fists"


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.lower().replace("_", " ").capitalize()


class WeaponSlot(NiceEnum):
    """Defines which hand an attack was performed with."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    UNARMED = "unarmed"


class OutcomeKind(NiceEnum):
    """Discriminant of an attack resolution result."""

    OUT_OF_RANGE = "out_of_range"
    NO_AMMO = "no_ammo"
    BLOCKED = "blocked"
    DODGED = "dodged"
    DAMAGE = "damage"


class OutOfRangeReason(NiceEnum):
    """Why an attack could not reach its target."""

    DISTANCE = "distance"
    NO_AMMO = "no_ammo"


class EventKind(NiceEnum):
    """Defines the kinds of structured events emitted during a combat."""

    COMBAT_STARTED = "combat_started"
    ROUND_STARTED = "round_started"
    ROUND_ENDED = "round_ended"
    CONSUMABLE_USED = "consumable_used"
    POISON_TICK = "poison_tick"
    POISON_ENDED = "poison_ended"
    MOVED = "moved"
    OUT_OF_RANGE = "out_of_range"
    NO_AMMO = "no_ammo"
    BLOCKED = "blocked"
    DODGED = "dodged"
    DAMAGE = "damage"
    POISONED = "poisoned"
    ELIMINATED = "eliminated"
    COMBAT_RESOLVED = "combat_resolved"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this event kind."""
        return {
            EventKind.COMBAT_STARTED: "📣",
            EventKind.ROUND_STARTED: "⏱",
            EventKind.CONSUMABLE_USED: "🧪",
            EventKind.POISON_TICK: "☠️",
            EventKind.POISON_ENDED: "💊",
            EventKind.MOVED: "🚶",
            EventKind.OUT_OF_RANGE: "⚠️",
            EventKind.NO_AMMO: "🏹",
            EventKind.BLOCKED: "🛡️",
            EventKind.DODGED: "💨",
            EventKind.DAMAGE: "⚔️",
            EventKind.POISONED: "🐍",
            EventKind.ELIMINATED: "💀",
            EventKind.COMBAT_RESOLVED: "🏆",
        }.get(self, "❔")


class ResolutionKind(NiceEnum):
    """Defines how a combat ended."""

    WINNER = "winner"
    DRAW = "draw"
    STALEMATE = "stalemate"

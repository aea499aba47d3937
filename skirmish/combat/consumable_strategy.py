"""
Consumable usage agent for the skirmish engine.

Before acting, a fighter may use at most one inventory item. The item is
chosen by a fixed list of prioritized rules; a rule that finds no matching
item lets the next one try. Within a rule the first matching inventory slot
wins, items are never re-ranked by magnitude.
"""

from typing import Any, Callable

from pydantic import BaseModel, Field

from ..core.logging import log_debug
from ..core.rng import SeededRandom
from ..core.settings import DEFAULT_SETTINGS, CombatSettings
from ..items.consumable import (
    AntidoteEffect,
    AttackEffect,
    Consumable,
    EnduranceEffect,
    EvasionEffect,
    Food,
    HealEffect,
    Potion,
)

# =============================================================================
# Support Functions
# =============================================================================

# Healing priorities as (healing potion, food).
CRITICAL_HEALING_PRIORITIES = (100, 40)
MODERATE_HEALING_PRIORITIES = (50, 60)


class ConsumableUse(BaseModel):
    """Records which item a fighter used and what it did."""

    index: int = Field(
        description="Inventory index the item was taken from.",
    )
    item_name: str = Field(
        description="Name of the item used.",
    )
    rule: str = Field(
        description="Name of the rule that selected the item.",
    )
    messages: list[str] = Field(
        default_factory=list,
        description="Messages produced by the item.",
    )


def _is_potion_with(item: Consumable, effect_type: type) -> bool:
    return isinstance(item, Potion) and isinstance(item.effect, effect_type)


def _first_index(
    inventory: list[Consumable], predicate: Callable[[Consumable], bool]
) -> int | None:
    for index, item in enumerate(inventory):
        if predicate(item):
            return index
    return None


def find_best_healing(
    inventory: list[Consumable], priorities: tuple[int, int]
) -> int | None:
    """
    Find the healing item with the highest priority.

    Args:
        inventory (list[Consumable]):
            The fighter's inventory.
        priorities (tuple[int, int]):
            Priority of a healing potion and of food, in this order.

    Returns:
        int | None:
            Index of the chosen item, the first one on ties, or None if the
            inventory holds nothing that heals.

    """
    potion_priority, food_priority = priorities
    best_index: int | None = None
    best_priority = 0
    for index, item in enumerate(inventory):
        priority = 0
        if _is_potion_with(item, HealEffect):
            priority = potion_priority
        elif isinstance(item, Food):
            priority = food_priority
        if priority > best_priority:
            best_priority = priority
            best_index = index
    return best_index


def find_antidote(inventory: list[Consumable]) -> int | None:
    return _first_index(inventory, lambda item: _is_potion_with(item, AntidoteEffect))


def find_ammo_restoration(inventory: list[Consumable]) -> int | None:
    return _first_index(inventory, lambda item: _is_potion_with(item, EnduranceEffect))


def find_attack_boost(inventory: list[Consumable]) -> int | None:
    return _first_index(
        inventory,
        lambda item: _is_potion_with(item, AttackEffect)
        or (isinstance(item, Food) and item.attack_bonus_percent > 0),
    )


def find_evasion_boost(inventory: list[Consumable]) -> int | None:
    return _first_index(
        inventory,
        lambda item: _is_potion_with(item, EvasionEffect)
        or (isinstance(item, Food) and item.dodge_bonus_percent > 0),
    )


# =============================================================================
# Strategy
# =============================================================================


class ConsumableStrategy:
    """
    Stateless rule agent deciding which item, if any, a fighter uses.

    Health thresholds are absolute health points, 30 and 50 by default,
    whatever the fighter's health at creation.

    Rules, in order:
        1. Critical health: best healing item, potions first.
        2. Poisoned: an antidote.
        3. Low ammunition: an endurance potion.
        4. Low health: best healing item, food first.
        5. Healthy: an attack boost if no attack buff is active, then an
           evasion boost if no dodge buff is active.
    """

    def __init__(self, settings: CombatSettings = DEFAULT_SETTINGS) -> None:
        self.settings = settings

    def choose(self, fighter: Any) -> tuple[int, str] | None:
        """
        Pick the inventory index to use without using it.

        Args:
            fighter (Fighter): The fighter about to act.

        Returns:
            tuple[int, str] | None: The index and the name of the rule that
            selected it, or None when nothing should be used.

        """
        inventory = fighter.inventory
        if not inventory:
            return None

        health = fighter.health

        if health <= self.settings.critical_health:
            index = find_best_healing(inventory, CRITICAL_HEALING_PRIORITIES)
            if index is not None:
                return index, "critical_health"

        if fighter.is_poisoned():
            index = find_antidote(inventory)
            if index is not None:
                return index, "poisoned"

        if fighter.get_total_ammo() <= self.settings.low_ammo_threshold:
            index = find_ammo_restoration(inventory)
            if index is not None:
                return index, "low_ammo"

        if health <= self.settings.low_health:
            index = find_best_healing(inventory, MODERATE_HEALING_PRIORITIES)
            if index is not None:
                return index, "low_health"

        if health > self.settings.low_health:
            if not fighter.has_attack_buff():
                index = find_attack_boost(inventory)
                if index is not None:
                    return index, "attack_boost"
            if not fighter.has_dodge_buff():
                index = find_evasion_boost(inventory)
                if index is not None:
                    return index, "evasion_boost"

        return None

    def evaluate_and_use(self, fighter: Any, rng: SeededRandom) -> ConsumableUse | None:
        """
        Let the fighter use the item selected by the rules, if any.

        Args:
            fighter (Fighter): The fighter about to act.
            rng (SeededRandom): The generator of the running combat.

        Returns:
            ConsumableUse | None: What was used, or None.

        """
        choice = self.choose(fighter)
        if choice is None:
            return None
        index, rule = choice
        item_name = fighter.inventory[index].name
        messages = fighter.use_consumable(index, rng)
        log_debug(
            f"{fighter.name} uses {item_name}",
            {"rule": rule, "index": index},
        )
        return ConsumableUse(index=index, item_name=item_name, rule=rule, messages=messages)

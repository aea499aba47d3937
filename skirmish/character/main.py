"""
Fighter module for the skirmish engine.

Defines the Fighter class: the mutable combat entity holding health, position,
equipment, buffs, poison and inventory, together with movement, turn-start
processing and the full attack resolution pipeline.
"""

from catchery import log_warning

from ..combat.events import CombatEvent
from ..combat.outcome import (
    AttackOutcome,
    Blocked,
    Damage,
    Dodged,
    NoAmmo,
    OutOfRange,
    WeaponInfo,
)
from ..core.constants import (
    DEFAULT_STEP,
    UNARMED_NAME,
    EventKind,
    OutOfRangeReason,
    WeaponSlot,
)
from ..core.logging import log_debug
from ..core.rng import SeededRandom
from ..core.settings import DEFAULT_SETTINGS, CombatSettings
from ..items.armor import Armor, Shield
from ..items.boots import Boots
from ..items.consumable import Consumable
from ..items.weapon import Weapon
from .character_effects import Buff, Poison


class Fighter:
    """
    Represents a fighter standing on the combat line.

    Attributes:
        name (str):
            The name of the fighter.
        health (float):
            Current health, may become negative when a hit overkills.
        max_health (float):
            Health at creation, never recalculated.
        position (float):
            Position on the one-dimensional line.
        primary_weapon (Weapon | None):
            Weapon tried first when attacking.
        secondary_weapon (Weapon | None):
            Weapon tried when the primary one cannot be used.
        shield (Shield | None):
            Shield that may block incoming hits.
        armor (Armor | None):
            Armor absorbing part of incoming damage.
        boots (Boots | None):
            Boots modifying movement, resistance and dodge.
        inventory (list[Consumable]):
            Ordered consumables; order decides which item is picked first.
        attack_buff (Buff):
            Temporary damage increase.
        dodge_buff (Buff):
            Temporary dodge chance increase.
        movement_buff (Buff):
            Temporary movement increase.
        poison (Poison | None):
            Active poison, if any.

    """

    name: str
    health: float
    max_health: float
    position: float
    primary_weapon: Weapon | None
    secondary_weapon: Weapon | None
    shield: Shield | None
    armor: Armor | None
    boots: Boots | None
    inventory: list[Consumable]
    attack_buff: Buff
    dodge_buff: Buff
    movement_buff: Buff
    poison: Poison | None

    def __init__(
        self,
        name: str,
        health: float = 100.0,
        position: float = 0.0,
        primary_weapon: Weapon | None = None,
        secondary_weapon: Weapon | None = None,
        shield: Shield | None = None,
        armor: Armor | None = None,
        boots: Boots | None = None,
        inventory: list[Consumable] | None = None,
        max_health: float | None = None,
    ) -> None:
        if not name:
            raise ValueError("Fighter name must not be empty.")
        self.name = name
        self.health = float(health)
        self.max_health = float(health if max_health is None else max_health)
        self.position = float(position)
        self.primary_weapon = primary_weapon
        self.secondary_weapon = secondary_weapon
        self.shield = shield
        self.armor = armor
        self.boots = boots
        self.inventory = list(inventory or [])
        self.attack_buff = Buff()
        self.dodge_buff = Buff()
        self.movement_buff = Buff()
        self.poison = None

    def __repr__(self) -> str:
        return f"Fighter({self.name!r}, health={self.health:g}, position={self.position:g})"

    # ============================================================================
    # STATE
    # ============================================================================

    def is_alive(self) -> bool:
        return self.health > 0

    def has_attack_buff(self) -> bool:
        return self.attack_buff.is_active()

    def has_dodge_buff(self) -> bool:
        return self.dodge_buff.is_active()

    def has_movement_buff(self) -> bool:
        return self.movement_buff.is_active()

    def is_poisoned(self) -> bool:
        return self.poison is not None

    def weapons(self) -> list[Weapon]:
        """Equipped weapons in priority order."""
        return [w for w in (self.primary_weapon, self.secondary_weapon) if w is not None]

    def get_total_ammo(self) -> int:
        """Sum of the ammunition left in every finite quiver."""
        return sum(w.remaining_ammo() or 0 for w in self.weapons() if w.has_finite_ammo())

    # ============================================================================
    # MOVEMENT
    # ============================================================================

    def distance_to(self, other: "Fighter") -> float:
        return abs(self.position - other.position)

    def move_towards(self, target: "Fighter", base_step: float = DEFAULT_STEP) -> float:
        """
        Step towards the target, never past it.

        The step is scaled by the movement buff, which spends one turn, and by
        the boots' movement bonus. The multiplier is not clamped, so a large
        negative bonus moves the fighter away.

        Args:
            target (Fighter): The fighter to approach.
            base_step (float): Length of a step before modifiers.

        Returns:
            float: The signed distance actually travelled.

        """
        distance = self.distance_to(target)
        if distance == 0:
            return 0.0

        direction = 1.0 if target.position > self.position else -1.0

        multiplier = 1.0
        if self.movement_buff.is_active():
            multiplier += self.movement_buff.percent
            self.movement_buff.consume_turn()
        if self.boots is not None:
            multiplier += self.boots.movement_bonus

        movement = min(base_step * multiplier, distance)
        self.position += direction * movement
        return direction * movement

    # ============================================================================
    # TURN PROCESSING
    # ============================================================================

    def begin_turn(self) -> list[CombatEvent]:
        """
        Apply start-of-turn effects, which for now means the poison tick.

        Returns:
            list[CombatEvent]: The poison events produced this turn.

        """
        if self.poison is None:
            return []

        damage = self.poison.tick()
        self.health -= damage
        events = [
            CombatEvent(
                kind=EventKind.POISON_TICK,
                actor=self.name,
                payload={
                    "damage": damage,
                    "turns_remaining": self.poison.turns_remaining,
                    "health": self.health,
                },
            )
        ]
        if self.poison.is_expired():
            self.poison = None
            events.append(CombatEvent(kind=EventKind.POISON_ENDED, actor=self.name))
        return events

    # ============================================================================
    # ATTACK RESOLUTION
    # ============================================================================

    def _select_weapon(self, distance: float, require_ammo: bool) -> Weapon | None:
        # Priority order, the first usable weapon wins.
        for weapon in self.weapons():
            if weapon.range >= distance and (not require_ammo or weapon.has_ammo()):
                return weapon
        return None

    def _weapon_info(self, weapon: Weapon | None) -> WeaponInfo:
        if weapon is None:
            return WeaponInfo(name=UNARMED_NAME, slot=WeaponSlot.UNARMED)
        slot = WeaponSlot.PRIMARY if weapon is self.primary_weapon else WeaponSlot.SECONDARY
        return WeaponInfo(name=weapon.name, slot=slot, is_melee=weapon.is_melee)

    def _dodge_chance(self, settings: CombatSettings) -> float:
        chance = settings.base_dodge_chance
        if self.dodge_buff.is_active():
            chance += self.dodge_buff.percent * 100
        if self.boots is not None:
            chance += self.boots.dodge_bonus * 100
        return max(0.0, min(settings.max_dodge_chance, chance))

    def attack(
        self,
        target: "Fighter",
        rng: SeededRandom,
        settings: CombatSettings = DEFAULT_SETTINGS,
    ) -> AttackOutcome:
        """
        Attempt to attack the target and resolve the hit.

        Args:
            target (Fighter): The defender.
            rng (SeededRandom): The generator of the running combat.
            settings (CombatSettings): Tunable rule parameters.

        Returns:
            AttackOutcome: Exactly one of OutOfRange, NoAmmo, Blocked, Dodged
            or Damage.

        """
        distance = self.distance_to(target)
        weapon = self._select_weapon(distance, require_ammo=True)
        fallback = self._select_weapon(distance, require_ammo=False)

        if weapon is None and distance > settings.base_range:
            if fallback is not None and not fallback.is_melee and fallback.range >= distance:
                # The weapon could reach but is empty, moving would not help.
                return OutOfRange(
                    reason=OutOfRangeReason.NO_AMMO,
                    distance=distance,
                    weapon=self._weapon_info(fallback),
                    should_move=False,
                )
            return OutOfRange(
                reason=OutOfRangeReason.NO_AMMO if fallback else OutOfRangeReason.DISTANCE,
                distance=distance,
                weapon=self._weapon_info(fallback) if fallback else None,
                should_move=True,
            )

        if weapon is None and fallback is not None:
            return NoAmmo(weapon=self._weapon_info(fallback), ammo_remaining=0)

        info = self._weapon_info(weapon)
        if weapon is not None:
            damage = weapon.damage
        else:
            damage = float(
                rng.uniform_int(settings.unarmed_damage_min, settings.unarmed_damage_max)
            )
        if self.attack_buff.is_active():
            damage *= 1 + self.attack_buff.percent

        if weapon is not None and not weapon.consume_ammo():
            return NoAmmo(weapon=info, ammo_remaining=weapon.remaining_ammo() or 0)
        ammo_remaining = weapon.remaining_ammo() if weapon is not None else None

        outcome = self._resolve_hit(target, damage, info, ammo_remaining, rng, settings)
        self.attack_buff.consume_turn()

        if (
            isinstance(outcome, Damage)
            and weapon is not None
            and weapon.poison is not None
            and target.is_alive()
        ):
            target.apply_poison(weapon.poison.damage_per_turn, weapon.poison.turns)
            outcome.poisoned = True

        log_debug(
            f"{self.name} attacks {target.name}",
            {"outcome": outcome.kind, "weapon": info.name, "distance": distance},
        )
        return outcome

    def _resolve_hit(
        self,
        target: "Fighter",
        damage: float,
        info: WeaponInfo,
        ammo_remaining: int | None,
        rng: SeededRandom,
        settings: CombatSettings,
    ) -> Blocked | Dodged | Damage:
        # Shield, dodge, armor, boots: in this order, stopping at the first
        # full negation.
        shield = target.shield
        if shield is not None and not shield.is_broken():
            if rng.percent(shield.block_chance(settings.block_chance_per_tier)):
                if shield.absorb(damage):
                    return Blocked(
                        weapon=info,
                        shield_durability=shield.durability,
                        ammo_remaining=ammo_remaining,
                    )

        dodged = rng.percent(target._dodge_chance(settings))
        target.dodge_buff.consume_turn()
        if dodged:
            return Dodged(weapon=info, ammo_remaining=ammo_remaining)

        raw_damage = damage
        armor_reduction = 0.0
        if target.armor is not None and not target.armor.is_broken():
            remaining = target.armor.absorb(damage)
            armor_reduction = damage - remaining
            damage = remaining

        boots_reduction = 0.0
        if target.boots is not None:
            boots_reduction = damage * target.boots.resistance_bonus
            damage -= boots_reduction

        target.health -= damage

        return Damage(
            weapon=info,
            raw_damage=raw_damage,
            armor_reduction=armor_reduction,
            boots_reduction=boots_reduction,
            damage=damage,
            ammo_remaining=ammo_remaining,
        )

    # ============================================================================
    # HEALING, BUFFS AND POISON
    # ============================================================================

    def heal(self, amount: float) -> float:
        """
        Restore health. Healing is not capped at the health at creation.

        Args:
            amount (float): Health to restore, negative values count as zero.

        Returns:
            float: The health actually restored.

        """
        amount = max(0.0, float(amount))
        self.health += amount
        return amount

    def add_attack_bonus(self, percent: float, turns: int) -> None:
        self.attack_buff.stack(percent, turns)

    def add_dodge_bonus(self, percent: float, turns: int) -> None:
        self.dodge_buff.stack(percent, turns)

    def add_movement_bonus(self, percent: float, turns: int) -> None:
        self.movement_buff.stack(percent, turns)

    def apply_poison(self, damage_per_turn: float, turns: int) -> None:
        """Poison the fighter, replacing any poison already active."""
        self.poison = Poison(damage_per_turn=damage_per_turn, turns_remaining=turns)

    def cleanse_poison(self) -> bool:
        """
        Remove the active poison.

        Returns:
            bool: True if there was a poison to remove, False otherwise.

        """
        if self.poison is None:
            return False
        self.poison = None
        return True

    # ============================================================================
    # AMMUNITION AND INVENTORY
    # ============================================================================

    def restore_ammo(self, ratio: float, flat: int = 0) -> int:
        """Restore ammunition to every equipped weapon, returning the total."""
        return sum(weapon.restore_ammo(ratio, flat) for weapon in self.weapons())

    def use_consumable(self, index: int, rng: SeededRandom) -> list[str]:
        """
        Remove the item at the given inventory index and apply it.

        Args:
            index (int): Position of the item in the inventory.
            rng (SeededRandom): The generator of the running combat.

        Returns:
            list[str]: Messages describing the effect, empty when the index
            does not point to an item.

        """
        if index < 0 or index >= len(self.inventory):
            log_warning(
                "Invalid inventory index, nothing consumed",
                {"fighter": self.name, "index": index, "size": len(self.inventory)},
            )
            return []
        item = self.inventory.pop(index)
        return item.consume(self, rng)

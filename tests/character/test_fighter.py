"""
Tests for fighter state, movement, buffs, poison and inventory handling.
"""

import pytest
from skirmish.character.character_effects import Buff, Poison
from skirmish.character.main import Fighter
from skirmish.core.constants import EventKind
from skirmish.items.boots import Boots
from skirmish.items.consumable import Food, Potion
from skirmish.items.weapon import Weapon


@pytest.fixture
def runner():
    return Fighter(name="Runner", position=0)


@pytest.fixture
def target():
    return Fighter(name="Target", position=5)


@pytest.mark.parametrize(
    "health, alive",
    [(100, True), (0.1, True), (0, False), (-3, False)],
)
def test_is_alive_iff_health_positive(health, alive):
    assert Fighter(name="Someone", health=health).is_alive() is alive


def test_empty_name_is_rejected():
    with pytest.raises(ValueError):
        Fighter(name="")


def test_heal_is_not_capped():
    """Healing may raise health above the value at creation."""
    fighter = Fighter(name="Tank", health=100)
    assert fighter.heal(50) == 50
    assert fighter.health == 150
    assert fighter.max_health == 100
    assert fighter.heal(-10) == 0
    assert fighter.health == 150


def test_move_towards(runner, target):
    assert runner.move_towards(target) == 1.0
    assert runner.position == 1.0
    assert target.move_towards(runner) == -1.0
    assert target.position == 4.0


def test_move_never_overshoots(runner):
    close = Fighter(name="Close", position=0.5)
    assert runner.move_towards(close) == 0.5
    assert runner.position == 0.5
    assert runner.move_towards(close) == 0.0


def test_boots_change_step(target):
    fast = Fighter(name="Fast", boots=Boots.running())
    slow = Fighter(name="Slow", boots=Boots.heavy())
    fast.move_towards(target)
    slow.move_towards(target)
    assert fast.position == pytest.approx(1.5)
    assert slow.position == pytest.approx(0.8)


def test_movement_buff_spends_a_turn(runner, target):
    """The movement buff lengthens one step per turn and then expires."""
    runner.add_movement_bonus(0.5, 1)
    runner.move_towards(target)
    assert runner.position == pytest.approx(1.5)
    assert runner.movement_buff == Buff()
    runner.move_towards(target)
    assert runner.position == pytest.approx(2.5)


def test_negative_multiplier_moves_away(target):
    """The step multiplier is not clamped, so it may point backwards."""
    stumbler = Fighter(name="Stumbler", boots=Boots(movement_bonus=-2.0))
    assert stumbler.move_towards(target) == pytest.approx(-1.0)
    assert stumbler.position == pytest.approx(-1.0)


def test_buff_stacks_percent_but_not_turns():
    fighter = Fighter(name="Buffed")
    fighter.add_attack_bonus(0.2, 3)
    fighter.add_attack_bonus(0.1, 2)
    assert fighter.attack_buff.percent == pytest.approx(0.3)
    assert fighter.attack_buff.turns == 3


def test_buff_without_duration_stays_at_rest():
    """A zero-turn application leaves no magnitude behind."""
    fighter = Fighter(name="Buffed")
    fighter.add_attack_bonus(0.5, 0)
    assert fighter.attack_buff == Buff(percent=0.0, turns=0)
    fighter.add_attack_bonus(0.1, 2)
    assert fighter.attack_buff.percent == pytest.approx(0.1)
    assert fighter.attack_buff.turns == 2


def test_zero_turn_application_stacks_on_active_buff():
    fighter = Fighter(name="Buffed")
    fighter.add_dodge_bonus(0.2, 2)
    fighter.add_dodge_bonus(0.1, 0)
    assert fighter.dodge_buff.percent == pytest.approx(0.3)
    assert fighter.dodge_buff.turns == 2


def test_buff_returns_to_rest():
    """Spending every turn brings the buff back to zero magnitude."""
    buff = Buff()
    buff.stack(0.4, 2)
    buff.consume_turn()
    assert buff.is_active()
    buff.consume_turn()
    assert buff == Buff(percent=0.0, turns=0)
    buff.consume_turn()
    assert buff == Buff()


def test_poison_is_replaced_not_stacked():
    fighter = Fighter(name="Victim")
    fighter.apply_poison(5, 3)
    fighter.apply_poison(2, 1)
    assert fighter.poison == Poison(damage_per_turn=2, turns_remaining=1)


def test_cleanse_without_poison():
    fighter = Fighter(name="Healthy", health=80)
    assert fighter.cleanse_poison() is False
    assert fighter.poison is None
    assert fighter.health == 80


def test_begin_turn_ticks_poison():
    """Poison deals its damage at turn start and announces its end."""
    fighter = Fighter(name="Victim", health=100)
    fighter.apply_poison(5, 2)

    events = fighter.begin_turn()
    assert [event.kind for event in events] == [EventKind.POISON_TICK]
    assert events[0].payload == {"damage": 5, "turns_remaining": 1, "health": 95}
    assert fighter.health == 95

    events = fighter.begin_turn()
    assert [event.kind for event in events] == [
        EventKind.POISON_TICK,
        EventKind.POISON_ENDED,
    ]
    assert fighter.health == 90
    assert fighter.poison is None

    assert fighter.begin_turn() == []
    assert fighter.health == 90


def test_total_ammo_counts_only_finite_quivers():
    fighter = Fighter(
        name="Archer",
        primary_weapon=Weapon.ranged("Bow", damage=5, range=6, arrows=10),
        secondary_weapon=Weapon.ranged("Magic bow", damage=5, range=6),
    )
    assert fighter.get_total_ammo() == 10
    assert Fighter(name="Brawler", primary_weapon=Weapon.melee("Club", 4)).get_total_ammo() == 0


def test_restore_ammo_sums_weapons():
    first = Weapon.ranged("Bow", damage=5, range=6, arrows=4)
    second = Weapon.ranged("Crossbow", damage=9, range=8, arrows=2)
    for weapon in (first, second):
        while weapon.consume_ammo():
            pass
    fighter = Fighter(name="Archer", primary_weapon=first, secondary_weapon=second)
    assert fighter.restore_ammo(0.5) == 3
    assert fighter.get_total_ammo() == 3


def test_use_consumable_removes_item(scripted_rng):
    """Using an item removes it and keeps the order of the others."""
    bread = Food.plain("Bread", 10)
    tonic = Potion.attack_boost("Tonic", 0.2, 2)
    antidote = Potion.antidote("Antidote")
    fighter = Fighter(name="Eater", health=50, inventory=[bread, tonic, antidote])

    messages = fighter.use_consumable(1, scripted_rng())
    assert messages
    assert fighter.inventory == [bread, antidote]
    assert fighter.has_attack_buff()


@pytest.mark.parametrize("index", [-1, 3, 10])
def test_use_consumable_invalid_index(index, scripted_rng):
    bread = Food.plain("Bread", 10)
    fighter = Fighter(name="Eater", health=50, inventory=[bread])
    assert fighter.use_consumable(index, scripted_rng()) == []
    assert fighter.inventory == [bread]
    assert fighter.health == 50

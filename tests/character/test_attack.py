"""
Tests for attack resolution: weapon choice, range, ammunition, shield, dodge,
armor, boots, buffs and poison coatings.
"""

import pytest
from skirmish.character.main import Fighter
from skirmish.combat.outcome import Blocked, Damage, Dodged, NoAmmo, OutOfRange
from skirmish.core.constants import UNARMED_NAME, OutOfRangeReason, WeaponSlot
from skirmish.items.armor import Armor, Shield
from skirmish.items.boots import Boots
from skirmish.items.weapon import PoisonCoating, Weapon

# Rolls above every chance used in these tests: never blocks, never dodges.
MISS = 100


@pytest.fixture
def swordsman():
    return Fighter(name="Swordsman", position=0, primary_weapon=Weapon.melee("Sword", 10))


@pytest.fixture
def dummy():
    return Fighter(name="Dummy", health=100, position=1)


def test_unarmed_out_of_range(scripted_rng):
    """An unarmed fighter too far away is told to move, without any draw."""
    attacker = Fighter(name="A", position=0)
    defender = Fighter(name="B", position=5)
    outcome = attacker.attack(defender, scripted_rng())
    assert isinstance(outcome, OutOfRange)
    assert outcome.reason == OutOfRangeReason.DISTANCE
    assert outcome.should_move
    assert outcome.weapon is None
    assert outcome.distance == 5


def test_empty_bow_in_range_does_not_move(scripted_rng):
    """An empty ranged weapon that could reach does not ask for movement."""
    archer = Fighter(
        name="Archer",
        position=0,
        primary_weapon=Weapon.ranged("Bow", damage=8, range=6, arrows=0),
    )
    defender = Fighter(name="B", position=4)
    outcome = archer.attack(defender, scripted_rng())
    assert isinstance(outcome, OutOfRange)
    assert outcome.reason == OutOfRangeReason.NO_AMMO
    assert not outcome.should_move
    assert outcome.weapon.name == "Bow"


def test_empty_bow_beyond_range_moves(scripted_rng):
    archer = Fighter(
        name="Archer",
        position=0,
        primary_weapon=Weapon.ranged("Bow", damage=8, range=6, arrows=0),
    )
    defender = Fighter(name="B", position=8)
    outcome = archer.attack(defender, scripted_rng())
    assert isinstance(outcome, OutOfRange)
    assert outcome.reason == OutOfRangeReason.DISTANCE
    assert outcome.should_move


def test_last_arrow_then_no_ammo(dummy, scripted_rng):
    """The last arrow is shot, the next attempt reports no ammunition."""
    archer = Fighter(
        name="Archer",
        position=0,
        primary_weapon=Weapon.ranged("Bow", damage=8, range=6, arrows=1),
    )
    first = archer.attack(dummy, scripted_rng(MISS))
    assert isinstance(first, Damage)
    assert first.ammo_remaining == 0
    assert first.weapon.slot == WeaponSlot.PRIMARY
    assert not first.weapon.is_melee

    second = archer.attack(dummy, scripted_rng())
    assert isinstance(second, NoAmmo)
    assert second.ammo_remaining == 0
    assert second.weapon.name == "Bow"


def test_melee_damage(swordsman, dummy, scripted_rng):
    outcome = swordsman.attack(dummy, scripted_rng(MISS))
    assert isinstance(outcome, Damage)
    assert outcome.raw_damage == 10
    assert outcome.damage == 10
    assert outcome.ammo_remaining is None
    assert dummy.health == 90


def test_unarmed_damage_is_drawn(dummy, scripted_rng):
    brawler = Fighter(name="Brawler", position=0)
    rng = scripted_rng(3, MISS)
    outcome = brawler.attack(dummy, rng)
    assert isinstance(outcome, Damage)
    assert outcome.weapon.name == UNARMED_NAME
    assert outcome.weapon.slot == WeaponSlot.UNARMED
    assert outcome.damage == 3
    assert rng.calls == [(1, 5), (1, 100)]


def test_dodge(swordsman, dummy, scripted_rng):
    """A roll at the base dodge chance avoids the hit."""
    outcome = swordsman.attack(dummy, scripted_rng(5))
    assert isinstance(outcome, Dodged)
    assert dummy.health == 100


def test_top_tier_shield_blocks(swordsman, scripted_rng):
    """A tier-5 shield blocks every hit while it holds."""
    defender = Fighter(name="Wall", position=1, shield=Shield(durability=100, tier=5))
    for durability in (90, 80, 70):
        outcome = swordsman.attack(defender, scripted_rng(MISS))
        assert isinstance(outcome, Blocked)
        assert outcome.shield_durability == durability
    assert defender.health == 100


def test_tierless_shield_still_rolls(swordsman, scripted_rng):
    defender = Fighter(name="Wall", position=1, shield=Shield(durability=100, tier=0))
    rng = scripted_rng(1, MISS)
    outcome = swordsman.attack(defender, rng)
    assert isinstance(outcome, Damage)
    assert len(rng.calls) == 2
    assert defender.shield.durability == 100


def test_broken_shield_is_skipped(swordsman, scripted_rng):
    defender = Fighter(name="Wall", position=1, shield=Shield(durability=5, tier=5))
    assert isinstance(swordsman.attack(defender, scripted_rng(1)), Blocked)
    assert defender.shield.is_broken()
    rng = scripted_rng(MISS)
    assert isinstance(swordsman.attack(defender, rng), Damage)
    assert len(rng.calls) == 1


def test_armor_absorbs_half(swordsman, scripted_rng):
    """Half-reduction armor with 10 durability takes 5 of a 10-damage hit."""
    defender = Fighter(
        name="Knight",
        position=1,
        armor=Armor(name="Test armor", durability=10, damage_reduction=0.5),
    )
    outcome = swordsman.attack(defender, scripted_rng(MISS))
    assert isinstance(outcome, Damage)
    assert outcome.armor_reduction == pytest.approx(5)
    assert outcome.damage == pytest.approx(5)
    assert defender.armor.durability == 5
    assert defender.health == pytest.approx(95)


def test_boots_resist_after_armor(swordsman, scripted_rng):
    defender = Fighter(
        name="Knight",
        position=1,
        armor=Armor(name="Test armor", durability=100, damage_reduction=0.5),
        boots=Boots(resistance_bonus=0.1),
    )
    outcome = swordsman.attack(defender, scripted_rng(MISS))
    assert outcome.boots_reduction == pytest.approx(0.5)
    assert outcome.damage == pytest.approx(4.5)
    assert defender.health == pytest.approx(95.5)


def test_silent_boots_raise_dodge(swordsman, scripted_rng):
    defender = Fighter(name="Shadow", position=1, boots=Boots.silent())
    assert isinstance(swordsman.attack(defender, scripted_rng(25)), Dodged)
    assert isinstance(swordsman.attack(defender, scripted_rng(26)), Damage)


def test_dodge_buff_spends_a_turn_per_check(swordsman, dummy, scripted_rng):
    dummy.add_dodge_bonus(0.5, 2)
    assert isinstance(swordsman.attack(dummy, scripted_rng(55)), Dodged)
    assert dummy.dodge_buff.turns == 1
    assert isinstance(swordsman.attack(dummy, scripted_rng(56)), Damage)
    assert not dummy.has_dodge_buff()
    assert dummy.dodge_buff.percent == 0


def test_dodge_chance_is_capped(swordsman, dummy, scripted_rng):
    dummy.add_dodge_bonus(2.0, 5)
    assert isinstance(swordsman.attack(dummy, scripted_rng(96)), Damage)


def test_attack_buff_multiplies_damage(swordsman, dummy, scripted_rng):
    """The attack buff scales damage and wears off after its turns."""
    swordsman.add_attack_bonus(0.5, 2)
    first = swordsman.attack(dummy, scripted_rng(MISS))
    assert first.raw_damage == pytest.approx(15)
    second = swordsman.attack(dummy, scripted_rng(MISS))
    assert second.raw_damage == pytest.approx(15)
    assert swordsman.attack_buff.percent == 0
    assert swordsman.attack_buff.turns == 0
    third = swordsman.attack(dummy, scripted_rng(MISS))
    assert third.raw_damage == 10


def test_attack_buff_kept_when_out_of_range(swordsman, scripted_rng):
    swordsman.add_attack_bonus(0.5, 1)
    far = Fighter(name="Far", position=10)
    assert isinstance(swordsman.attack(far, scripted_rng()), OutOfRange)
    assert swordsman.attack_buff.turns == 1


def test_weapon_priority_by_distance(scripted_rng):
    """The primary weapon wins when it reaches, the secondary otherwise."""
    attacker = Fighter(
        name="Hybrid",
        position=0,
        primary_weapon=Weapon.melee("Dagger", 4),
        secondary_weapon=Weapon.ranged("Bow", damage=8, range=6),
    )
    near = Fighter(name="Near", position=1)
    far = Fighter(name="Far", position=4)
    assert attacker.attack(near, scripted_rng(MISS)).weapon.name == "Dagger"
    outcome = attacker.attack(far, scripted_rng(MISS))
    assert outcome.weapon.name == "Bow"
    assert outcome.weapon.slot == WeaponSlot.SECONDARY


def test_poison_coating(dummy, scripted_rng):
    dagger = Weapon(
        name="Venom dagger",
        damage=4,
        poison=PoisonCoating(damage_per_turn=3, turns=3),
    )
    assassin = Fighter(name="Assassin", position=0, primary_weapon=dagger)
    outcome = assassin.attack(dummy, scripted_rng(MISS))
    assert outcome.poisoned
    assert dummy.poison.damage_per_turn == 3
    assert dummy.poison.turns_remaining == 3


def test_poison_coating_needs_a_hit(dummy, scripted_rng):
    dagger = Weapon(
        name="Venom dagger",
        damage=4,
        poison=PoisonCoating(damage_per_turn=3, turns=3),
    )
    assassin = Fighter(name="Assassin", position=0, primary_weapon=dagger)
    assert isinstance(assassin.attack(dummy, scripted_rng(1)), Dodged)
    assert dummy.poison is None


def test_overkill_leaves_negative_health(swordsman, scripted_rng):
    weak = Fighter(name="Weak", health=5, position=1)
    swordsman.attack(weak, scripted_rng(MISS))
    assert weak.health == -5
    assert not weak.is_alive()

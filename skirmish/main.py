"""
Demo entry point for the skirmish engine.

Sets up a small two-against-one-against-one skirmish, runs it with the given
seed and logs every event. Running it twice with the same seed produces the
same log.

Usage:
    python -m skirmish.main [seed]
"""

import logging
import sys

from .character.main import Fighter
from .combat.combat_manager import Combat, CombatResult
from .combat.party import Party
from .core.logging import log_info, setup_logging
from .core.rng import SeededRandom
from .items.armor import Armor, Shield
from .items.boots import Boots
from .items.consumable import Food, Potion
from .items.weapon import PoisonCoating, Weapon


def build_parties() -> list[Party]:
    """
    Builds the demo line-up.

    Returns:
        list[Party]: The parties, in turn order.

    """
    knight = Fighter(
        name="Steve",
        health=150,
        position=0,
        primary_weapon=Weapon.melee("Wooden sword", damage=10),
        shield=Shield(durability=65, tier=3),
        armor=Armor.iron(),
        inventory=[Potion.healing("Small healing potion"), Food.plain("Bread", 15)],
    )
    archer = Fighter(
        name="Robin",
        health=90,
        position=1,
        primary_weapon=Weapon.ranged("Short bow", damage=8, range=6, arrows=6),
        secondary_weapon=Weapon.melee("Knife", damage=4),
        boots=Boots.running(),
        inventory=[Potion.endurance("Endurance draught"), Potion.attack_boost("Rage tonic", 0.3, 3)],
    )
    brute = Fighter(
        name="Alex",
        health=135,
        position=9,
        primary_weapon=Weapon.melee("Stone axe", damage=7),
        boots=Boots.heavy(),
        inventory=[Food.with_attack_bonus("Roast meat", 10, 0.2, 2)],
    )
    assassin = Fighter(
        name="Nyx",
        health=80,
        position=14,
        primary_weapon=Weapon(
            name="Venom dagger",
            damage=5,
            range=2,
            poison=PoisonCoating(damage_per_turn=3, turns=3),
        ),
        boots=Boots.silent(),
        inventory=[Potion.antidote("Antidote"), Potion.evasion_boost("Smoke vial", 0.25, 3)],
    )
    return [
        Party.named("Wardens", knight, archer),
        Party.solo(brute),
        Party.solo(assassin),
    ]


def run_demo(seed: int | None = None) -> CombatResult:
    """
    Runs the demo skirmish.

    Args:
        seed (int | None): Seed of the run, a random one when omitted.

    Returns:
        CombatResult: The final report.

    """
    combat = Combat(build_parties(), rng=SeededRandom(seed))
    result = combat.start()
    log_info(
        f"{result.resolution.display_name} after {result.rounds} rounds",
        {"winner": result.team_name, "survivors": result.survivors, "seed": result.seed},
    )
    return result


if __name__ == "__main__":
    setup_logging(logging.INFO, event_level=logging.DEBUG)
    run_demo(int(sys.argv[1]) if len(sys.argv) > 1 else None)

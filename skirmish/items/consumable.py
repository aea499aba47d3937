"""
Consumable module for the skirmish engine.

Defines potions and food. A potion carries exactly one effect taken from a
closed set of variants, each with its own payload; food always heals and may
grant attack, movement or dodge bonuses on top.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

from ..core.rng import SeededRandom


class HealEffect(BaseModel):
    """Restores a random amount of health between `min` and `max`."""

    effect_type: Literal["heal"] = "heal"

    min: int = Field(default=20, description="Minimum health restored.")
    max: int = Field(default=60, description="Maximum health restored.")


class AttackEffect(BaseModel):
    """Temporarily increases the damage dealt."""

    effect_type: Literal["attack"] = "attack"

    percent: float = Field(description="Damage increase as a fraction.")
    turns: int = Field(description="Number of attacks the boost lasts.")


class EvasionEffect(BaseModel):
    """Temporarily increases the dodge chance."""

    effect_type: Literal["evasion"] = "evasion"

    percent: float = Field(description="Dodge chance increase as a fraction.")
    turns: int = Field(description="Number of dodge checks the boost lasts.")


class EnduranceEffect(BaseModel):
    """Restores ammunition to the drinker's ranged weapons."""

    effect_type: Literal["endurance"] = "endurance"

    ratio: float = Field(default=0.5, description="Share of quiver capacity restored.")
    flat: int = Field(default=0, description="Extra arrows restored per quiver.")


class AntidoteEffect(BaseModel):
    """Removes any active poison."""

    effect_type: Literal["antidote"] = "antidote"


PotionEffect = HealEffect | AttackEffect | EvasionEffect | EnduranceEffect | AntidoteEffect


class Consumable(BaseModel):
    """
    Base class of every inventory item a fighter can use during combat.
    """

    name: str = Field(
        description="The name of the item.",
    )
    description: str = Field(
        default="",
        description="A brief description of the item.",
    )

    def model_post_init(self, _: Any) -> None:
        assert self.name and isinstance(self.name, str), "Item name must not be empty."

    def consume(self, target: Any, rng: SeededRandom) -> list[str]:
        """
        Apply the item to the fighter consuming it.

        Args:
            target (Fighter): The fighter consuming the item.
            rng (SeededRandom): The generator of the running combat.

        Returns:
            list[str]: Messages describing what happened.

        """
        raise NotImplementedError("Subclasses must implement consume.")


class Potion(Consumable):
    """A potion with a single effect."""

    effect: PotionEffect = Field(
        description="The effect applied when the potion is drunk.",
    )

    @classmethod
    def healing(cls, name: str, min: int = 20, max: int = 60) -> "Potion":
        return cls(
            name=name,
            effect=HealEffect(min=min, max=max),
            description=f"Restores between {min} and {max} health.",
        )

    @classmethod
    def attack_boost(cls, name: str, percent: float, turns: int) -> "Potion":
        return cls(
            name=name,
            effect=AttackEffect(percent=percent, turns=turns),
            description=f"Increases damage by {round(percent * 100)}% for {turns} turns.",
        )

    @classmethod
    def evasion_boost(cls, name: str, percent: float, turns: int) -> "Potion":
        return cls(
            name=name,
            effect=EvasionEffect(percent=percent, turns=turns),
            description=f"Increases dodge chance by {round(percent * 100)}% for {turns} turns.",
        )

    @classmethod
    def endurance(cls, name: str, ratio: float = 0.5, flat: int = 0) -> "Potion":
        return cls(
            name=name,
            effect=EnduranceEffect(ratio=ratio, flat=flat),
            description="Restores part of the ammunition.",
        )

    @classmethod
    def antidote(cls, name: str) -> "Potion":
        return cls(
            name=name,
            effect=AntidoteEffect(),
            description="Removes any active poison.",
        )

    def consume(self, target: Any, rng: SeededRandom) -> list[str]:
        effect = self.effect
        if isinstance(effect, HealEffect):
            low = max(1, effect.min)
            high = max(low, effect.max)
            healed = target.heal(rng.uniform_int(low, high))
            return [f"{target.name} drinks {self.name} and recovers {healed:g} health."]
        if isinstance(effect, AttackEffect):
            percent = max(0.0, effect.percent)
            turns = max(1, effect.turns)
            target.add_attack_bonus(percent, turns)
            return [
                f"{target.name} is enraged by {self.name} "
                f"(+{round(percent * 100)}% damage, {turns} turns)."
            ]
        if isinstance(effect, EvasionEffect):
            percent = max(0.0, effect.percent)
            turns = max(1, effect.turns)
            target.add_dodge_bonus(percent, turns)
            return [
                f"{target.name} sharpens their reflexes with {self.name} "
                f"(+{round(percent * 100)}% dodge, {turns} turns)."
            ]
        if isinstance(effect, EnduranceEffect):
            restored = target.restore_ammo(effect.ratio, effect.flat)
            if restored <= 0:
                return [f"{self.name} has no effect: {target.name} has no ammunition to restore."]
            return [f"{target.name} recovers {restored} ammunition thanks to {self.name}."]
        if isinstance(effect, AntidoteEffect):
            if target.cleanse_poison():
                return [f"{target.name} is purged of all poison by {self.name}."]
            return [f"{self.name} has nothing to purge in {target.name}."]
        raise TypeError(f"Unknown potion effect: {type(effect).__name__}")


class Food(Consumable):
    """Food always heals a fixed amount and may grant temporary bonuses."""

    heal_amount: int = Field(
        description="Health restored when eaten.",
        ge=0,
    )
    attack_bonus_percent: float = Field(default=0.0, ge=0.0)
    attack_bonus_turns: int = Field(default=0, ge=0)
    movement_bonus_percent: float = Field(default=0.0, ge=0.0)
    movement_bonus_turns: int = Field(default=0, ge=0)
    dodge_bonus_percent: float = Field(default=0.0, ge=0.0)
    dodge_bonus_turns: int = Field(default=0, ge=0)

    @classmethod
    def plain(cls, name: str, heal_amount: int) -> "Food":
        return cls(name=name, heal_amount=heal_amount)

    @classmethod
    def with_attack_bonus(
        cls, name: str, heal_amount: int, percent: float, turns: int
    ) -> "Food":
        return cls(
            name=name,
            heal_amount=heal_amount,
            attack_bonus_percent=percent,
            attack_bonus_turns=turns,
        )

    @classmethod
    def with_movement_bonus(
        cls, name: str, heal_amount: int, percent: float, turns: int
    ) -> "Food":
        return cls(
            name=name,
            heal_amount=heal_amount,
            movement_bonus_percent=percent,
            movement_bonus_turns=turns,
        )

    @classmethod
    def with_dodge_bonus(
        cls, name: str, heal_amount: int, percent: float, turns: int
    ) -> "Food":
        return cls(
            name=name,
            heal_amount=heal_amount,
            dodge_bonus_percent=percent,
            dodge_bonus_turns=turns,
        )

    def grants_attack_bonus(self) -> bool:
        return self.attack_bonus_percent > 0 and self.attack_bonus_turns > 0

    def grants_movement_bonus(self) -> bool:
        return self.movement_bonus_percent > 0 and self.movement_bonus_turns > 0

    def grants_dodge_bonus(self) -> bool:
        return self.dodge_bonus_percent > 0 and self.dodge_bonus_turns > 0

    def consume(self, target: Any, rng: SeededRandom) -> list[str]:
        healed = target.heal(self.heal_amount)
        messages = [f"{target.name} eats {self.name} and recovers {healed:g} health."]
        if self.grants_attack_bonus():
            target.add_attack_bonus(self.attack_bonus_percent, self.attack_bonus_turns)
            messages.append(
                f"Damage bonus: +{round(self.attack_bonus_percent * 100)}% "
                f"for {self.attack_bonus_turns} turn(s)."
            )
        if self.grants_movement_bonus():
            target.add_movement_bonus(
                self.movement_bonus_percent, self.movement_bonus_turns
            )
            messages.append(
                f"Speed bonus: +{round(self.movement_bonus_percent * 100)}% "
                f"for {self.movement_bonus_turns} turn(s)."
            )
        if self.grants_dodge_bonus():
            target.add_dodge_bonus(self.dodge_bonus_percent, self.dodge_bonus_turns)
            messages.append(
                f"Dodge bonus: +{round(self.dodge_bonus_percent * 100)}% "
                f"for {self.dodge_bonus_turns} turn(s)."
            )
        return messages

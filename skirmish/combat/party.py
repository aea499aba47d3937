"""
Party module for the skirmish engine.

A party groups fighters that share a team: its members never target each
other. A lone fighter is a party of one.
"""

from typing import Any

from pydantic import BaseModel, Field


class Party(BaseModel):
    """A named or unnamed group of fighters fighting on the same side."""

    name: str | None = Field(
        default=None,
        description="Optional display name of the party.",
    )
    members: list[Any] = Field(
        description="Fighters belonging to the party, in turn order.",
    )

    def model_post_init(self, _: Any) -> None:
        from ..character.main import Fighter

        if not self.members:
            raise ValueError("A party must have at least one fighter.")
        if not all(isinstance(member, Fighter) for member in self.members):
            raise ValueError("Party members must be Fighter instances.")

    @classmethod
    def solo(cls, fighter: Any) -> "Party":
        return cls(members=[fighter])

    @classmethod
    def of(cls, *fighters: Any) -> "Party":
        return cls(members=list(fighters))

    @classmethod
    def named(cls, name: str, *fighters: Any) -> "Party":
        return cls(name=name, members=list(fighters))

    @property
    def size(self) -> int:
        return len(self.members)

    def display_name(self) -> str:
        """Returns the party name, or its members' names when it has none."""
        if self.name:
            return self.name
        return " & ".join(member.name for member in self.members)

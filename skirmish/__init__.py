"""
Skirmish: a deterministic, seeded, turn-based combat engine.

Fighters stand on a one-dimensional line, carry weapons, shields, armor, boots
and consumables, and fight alone or in parties until a single team is left.
"""

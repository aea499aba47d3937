"""
Combat system module for the skirmish engine.

This module handles the combat mechanics built on top of fighters: attack
outcomes, structured events, parties, the consumable agent and the round loop.
"""

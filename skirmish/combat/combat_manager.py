# combat_manager.py
from typing import Iterable

from catchery import log_warning
from pydantic import BaseModel, Field

from ..character.main import Fighter
from ..core.constants import EventKind, ResolutionKind
from ..core.error_handling import ERROR_HANDLER
from ..core.logging import log_event, log_info
from ..core.rng import SeededRandom
from ..core.settings import DEFAULT_SETTINGS, CombatSettings
from .consumable_strategy import ConsumableStrategy
from .events import CombatEvent, EventListener
from .outcome import AttackOutcome, Damage, OutOfRange
from .party import Party


class CombatResult(BaseModel):
    """Final report of a combat."""

    resolution: ResolutionKind = Field(
        description="Whether a team won, everybody fell, or the round cap was hit.",
    )
    winning_team: int | None = Field(
        default=None,
        description="Team id of the winners, when there are any.",
    )
    team_name: str | None = Field(
        default=None,
        description="Display name of the winning party.",
    )
    survivors: list[str] = Field(
        default_factory=list,
        description="Names of the fighters still alive at the end.",
    )
    rounds: int = Field(
        description="Number of rounds played.",
        ge=0,
    )
    seed: int = Field(
        description="Seed of the generator the combat ran with.",
    )


class Combat:
    """Runs a combat between two or more teams, round after round.

    Fighters are flattened once from the given parties into an arena: a dense
    list addressed by integer handles, with a parallel list mapping each handle
    to its team id. Team ids follow party order and start at zero. Dead
    fighters stay in the arena for the final report but never act nor get
    targeted again.
    """

    def __init__(
        self,
        parties: Iterable[Party],
        rng: SeededRandom | None = None,
        settings: CombatSettings | None = None,
        listeners: Iterable[EventListener] | None = None,
    ):
        """Initialize the Combat from the parties taking part in it.

        Args:
            parties (Iterable[Party]): Parties in turn order; a lone fighter is
                a party of one.
            rng (SeededRandom | None): Generator shared by the whole run, a
                freshly seeded one is created when omitted.
            settings (CombatSettings | None): Rule parameters, defaults when
                omitted.
            listeners (Iterable[EventListener] | None): Callables receiving
                every event as it is emitted.

        Raises:
            InvalidConfiguration: With fewer than two fighters, fewer than two
                teams, or a fighter listed twice.

        """
        self.settings: CombatSettings = settings or DEFAULT_SETTINGS
        self.rng: SeededRandom = rng or SeededRandom()
        self.strategy = ConsumableStrategy(self.settings)
        self.parties: list[Party] = list(parties)
        self.listeners: list[EventListener] = list(listeners or [])

        # Arena: fighters by handle, and the team of each handle.
        self.fighters: list[Fighter] = []
        self.team_ids: list[int] = []
        seen: set[int] = set()
        for team_id, party in enumerate(self.parties):
            for fighter in party.members:
                if id(fighter) in seen:
                    raise ERROR_HANDLER.configuration_error(
                        f"{fighter.name} is listed more than once",
                        {"fighter": fighter.name, "team": team_id},
                    )
                seen.add(id(fighter))
                self.fighters.append(fighter)
                self.team_ids.append(team_id)

        if len(self.fighters) < 2:
            raise ERROR_HANDLER.configuration_error(
                "A combat needs at least 2 fighters",
                {"fighters": len(self.fighters)},
            )
        if len(set(self.team_ids)) < 2:
            raise ERROR_HANDLER.configuration_error(
                "A combat needs at least 2 teams",
                {"teams": len(set(self.team_ids))},
            )

        # This represents the round number, starting at 1.
        self.round: int = 1
        self.events: list[CombatEvent] = []
        self.result: CombatResult | None = None

    @classmethod
    def from_fighters(
        cls,
        *fighters: Fighter,
        rng: SeededRandom | None = None,
        settings: CombatSettings | None = None,
    ) -> "Combat":
        """Build a free-for-all combat where every fighter is its own team."""
        return cls([Party.solo(fighter) for fighter in fighters], rng=rng, settings=settings)

    # ============================================================================
    # QUERIES
    # ============================================================================

    def get_alive_fighters(self) -> list[Fighter]:
        return [fighter for fighter in self.fighters if fighter.is_alive()]

    def get_alive_team_ids(self) -> set[int]:
        return {
            self.team_ids[handle]
            for handle, fighter in enumerate(self.fighters)
            if fighter.is_alive()
        }

    def count_alive_teams(self) -> int:
        return len(self.get_alive_team_ids())

    def team_of(self, fighter: Fighter) -> int:
        """Returns the team id of a fighter taking part in this combat."""
        for handle, candidate in enumerate(self.fighters):
            if candidate is fighter:
                return self.team_ids[handle]
        raise ValueError(f"{fighter.name} does not take part in this combat.")

    def are_allies(self, first: int, second: int) -> bool:
        return self.team_ids[first] == self.team_ids[second]

    def find_closest_target(self, handle: int) -> int | None:
        """Returns the handle of the closest living non-ally.

        On equal distances the first fighter found in arena order is kept.

        Args:
            handle (int): Handle of the attacker.

        Returns:
            int | None: Handle of the target, or None if nobody can be targeted.

        """
        attacker = self.fighters[handle]
        closest: int | None = None
        min_distance = float("inf")
        for other, candidate in enumerate(self.fighters):
            if other == handle or not candidate.is_alive():
                continue
            if self.are_allies(handle, other):
                continue
            distance = attacker.distance_to(candidate)
            if distance < min_distance:
                min_distance = distance
                closest = other
        return closest

    # ============================================================================
    # MAIN LOOP
    # ============================================================================

    def start(self) -> CombatResult:
        """Runs rounds until at most one team is left, or the round cap is hit.

        Returns:
            CombatResult: The final report. Calling start again on a resolved
            combat returns the same report.

        """
        if self.result is not None:
            return self.result

        log_info(
            "Combat started",
            {"fighters": len(self.fighters), "teams": len(self.parties), "seed": self.rng.seed},
        )
        self._emit(
            CombatEvent(
                kind=EventKind.COMBAT_STARTED,
                payload={
                    "seed": self.rng.seed,
                    "fighters": [
                        {
                            "name": fighter.name,
                            "team": self.team_ids[handle],
                            "health": fighter.health,
                            "position": fighter.position,
                        }
                        for handle, fighter in enumerate(self.fighters)
                    ],
                },
            )
        )

        stalemate = False
        while self.count_alive_teams() > 1:
            if self.settings.max_rounds is not None and self.round > self.settings.max_rounds:
                log_warning(
                    "Round cap reached, combat ends in a stalemate",
                    {"max_rounds": self.settings.max_rounds, "seed": self.rng.seed},
                )
                stalemate = True
                break
            self.run_round()
            self.round += 1

        self.result = self._resolve(stalemate)
        return self.result

    def run_round(self) -> None:
        """Runs a single round: every fighter alive at its start acts at most once."""
        snapshot = [handle for handle, fighter in enumerate(self.fighters) if fighter.is_alive()]
        self._emit(
            CombatEvent(kind=EventKind.ROUND_STARTED, payload={"alive": len(snapshot)})
        )

        for handle in snapshot:
            attacker = self.fighters[handle]
            if not attacker.is_alive():
                continue

            used = self.strategy.evaluate_and_use(attacker, self.rng)
            if used is not None:
                self._emit(
                    CombatEvent(
                        kind=EventKind.CONSUMABLE_USED,
                        actor=attacker.name,
                        payload=used.model_dump(mode="json"),
                    )
                )

            for event in attacker.begin_turn():
                self._emit(event)
            # A fighter killed by its own poison does nothing else this turn.
            if not attacker.is_alive():
                self._emit(
                    CombatEvent(
                        kind=EventKind.ELIMINATED,
                        actor=attacker.name,
                        payload={"cause": "poison", "remaining": len(self.get_alive_fighters())},
                    )
                )
                continue

            target_handle = self.find_closest_target(handle)
            if target_handle is None:
                break
            target = self.fighters[target_handle]

            outcome = attacker.attack(target, self.rng, self.settings)
            self._handle_outcome(attacker, target, outcome)

            if not target.is_alive():
                self._emit(
                    CombatEvent(
                        kind=EventKind.ELIMINATED,
                        actor=target.name,
                        target=attacker.name,
                        payload={"cause": "attack", "remaining": len(self.get_alive_fighters())},
                    )
                )

            if self.count_alive_teams() <= 1:
                break

        self._emit(
            CombatEvent(
                kind=EventKind.ROUND_ENDED,
                payload={"alive": len(self.get_alive_fighters())},
            )
        )

    # ============================================================================
    # EVENTS
    # ============================================================================

    def _handle_outcome(
        self, attacker: Fighter, target: Fighter, outcome: AttackOutcome
    ) -> None:
        """Moves the attacker when asked to, then turns the outcome into events."""
        must_move = isinstance(outcome, OutOfRange) and outcome.should_move
        if must_move:
            before = attacker.position
            moved = attacker.move_towards(target, self.settings.default_step)

        self._emit(
            CombatEvent(
                kind=EventKind(outcome.kind.value),
                actor=attacker.name,
                target=target.name,
                payload={**outcome.to_payload(), "target_health": target.health},
            )
        )

        if must_move:
            self._emit(
                CombatEvent(
                    kind=EventKind.MOVED,
                    actor=attacker.name,
                    target=target.name,
                    payload={
                        "from": before,
                        "to": attacker.position,
                        "moved": moved,
                        "distance_before": outcome.distance,
                        "distance_after": attacker.distance_to(target),
                    },
                )
            )

        if isinstance(outcome, Damage) and outcome.poisoned and target.poison is not None:
            self._emit(
                CombatEvent(
                    kind=EventKind.POISONED,
                    actor=target.name,
                    target=attacker.name,
                    payload=target.poison.model_dump(mode="json"),
                )
            )

    def _emit(self, event: CombatEvent, round: int | None = None) -> None:
        event.round = self.round if round is None else round
        self.events.append(event)
        log_event(str(event))
        for listener in self.listeners:
            listener(event)

    def _resolve(self, stalemate: bool) -> CombatResult:
        survivors = self.get_alive_fighters()
        alive_teams = sorted(self.get_alive_team_ids())
        rounds = self.round - 1

        if stalemate:
            result = CombatResult(
                resolution=ResolutionKind.STALEMATE,
                survivors=[fighter.name for fighter in survivors],
                rounds=rounds,
                seed=self.rng.seed,
            )
        elif len(alive_teams) == 1:
            team_id = alive_teams[0]
            result = CombatResult(
                resolution=ResolutionKind.WINNER,
                winning_team=team_id,
                team_name=self.parties[team_id].display_name(),
                survivors=[fighter.name for fighter in survivors],
                rounds=rounds,
                seed=self.rng.seed,
            )
        else:
            result = CombatResult(
                resolution=ResolutionKind.DRAW,
                rounds=rounds,
                seed=self.rng.seed,
            )

        self._emit(
            CombatEvent(
                kind=EventKind.COMBAT_RESOLVED,
                payload=result.model_dump(mode="json"),
            ),
            round=rounds,
        )
        log_info(
            "Combat resolved",
            {"resolution": result.resolution, "winner": result.team_name, "rounds": rounds},
        )
        return result

"""Game — the battle engine and its turn protocol.

One turn belongs to the player at the front of the rotation:
  1. Target acquisition — nearest other player by Euclidean distance
  2. Range check — out of range means the whole turn is spent moving
  3. Combat — attack roll, damage roll, immediate removal of the dead
  4. Rotation — the active player goes to the back, the turn counter advances
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from battlers.config import SimulationConfig
from battlers.core.enums import OutcomeKind, TurnAction
from battlers.core.errors import BattleInvariantError
from battlers.systems.rng import DiceRNG

if TYPE_CHECKING:
    from battlers.core.models import Player

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TurnResult:
    """What happened during a single turn."""

    actor: Player
    target: Player
    action: TurnAction
    distance: float
    hit: bool = False
    damage: int = 0
    killed: bool = False


@dataclass(frozen=True, slots=True)
class BattleOutcome:
    """Terminal (or current) result of a battle."""

    kind: OutcomeKind
    turns: int
    survivors: tuple[Player, ...]

    @property
    def winner(self) -> Player | None:
        return self.survivors[0] if self.kind == OutcomeKind.WINNER else None

    @property
    def decisive(self) -> bool:
        return self.kind == OutcomeKind.WINNER

    def summary(self) -> str:
        winner = self.winner
        if winner is not None:
            return (
                f"{winner.name} is the winner with {winner.armor.curr}/{winner.armor.base} "
                f"health remaining after {self.turns} turns"
            )
        if self.kind == OutcomeKind.TURN_CAP:
            return f"Battle ended inconclusively: too long ({self.turns} turns, {len(self.survivors)} standing)"
        return f"Battle ended inconclusively after {self.turns} turns"


class Game:
    """Owns the live players, the rotation order and the turn counter.

    Players are addressed by index into the remaining collection: the active
    player is popped off the front before it acts and pushed to the back
    afterwards, so it can never be its own target and never aliases one.
    """

    __slots__ = ("_config", "_rng", "turns", "players")

    def __init__(
        self,
        config: SimulationConfig | None = None,
        rng: DiceRNG | None = None,
        players: Iterable[Player] = (),
    ) -> None:
        self._config = config or SimulationConfig()
        self._rng = rng or DiceRNG.from_seed(self._config.seed)
        self.turns: int = 0
        self.players: deque[Player] = deque(players)

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def rng(self) -> DiceRNG:
        return self._rng

    @property
    def max_turns(self) -> int:
        return self._config.max_turns

    @property
    def live_count(self) -> int:
        return len(self.players)

    def add_player(self, player: Player) -> None:
        self.players.append(player)

    def nearest_index(self, source: Player) -> int | None:
        """Index of the closest player other than *source*; first wins ties."""
        min_distance = float("inf")
        target: int | None = None
        for idx, player in enumerate(self.players):
            if player.name == source.name:
                continue
            distance = source.loc.distance(player.loc)
            if distance < min_distance:
                min_distance = distance
                target = idx
        return target

    def is_over(self) -> bool:
        return len(self.players) <= 1 or self.turns > self.max_turns

    def take_turn(self) -> TurnResult:
        """Play one turn for the player at the front of the rotation.

        Does not advance past the turn cap on its own; callers decide when to
        stop. Requires at least two live players.
        """
        if len(self.players) < 2:
            raise BattleInvariantError(f"Cannot take a turn with {len(self.players)} player(s)")

        player = self.players.popleft()
        try:
            idx = self.nearest_index(player)
            if idx is None:
                raise BattleInvariantError(
                    f"No target found for {player.name} among {len(self.players)} other players"
                )
            target = self.players[idx]
            distance = player.loc.distance(target.loc)

            if player.in_range(target.loc):
                logger.info("%s is in range of %s", player.name, target.name)
                if player.attack_roll(target, self._rng):
                    damage = player.damage(target, self._rng)
                    logger.info("%s hit %s for %d damage", player.name, target.name, damage)
                    killed = target.is_dead()
                    if killed:
                        logger.warning("%s defeated %s", player.name, target.name)
                        del self.players[idx]
                    result = TurnResult(player, target, TurnAction.ATTACK, distance, True, damage, killed)
                else:
                    logger.info("%s missed", player.name)
                    result = TurnResult(player, target, TurnAction.ATTACK, distance)
            else:
                logger.info(
                    "%s is moving towards %s at a distance of %.1f", player.name, target.name, distance,
                )
                player.move_towards(target.loc)
                result = TurnResult(player, target, TurnAction.MOVE, distance)
        finally:
            self.players.append(player)

        self.turns += 1
        return result

    def run_simulation(self) -> int:
        """Play turns until one player stands or the turn cap is exceeded.

        Returns the number of turns elapsed. The cap check runs after each
        turn, so a stalemate stops with ``turns == max_turns + 1``.
        """
        logger.info("=== Battle started (%d players, seed=%d) ===", len(self.players), self._rng.seed)
        while len(self.players) > 1:
            self.take_turn()
            if self.turns > self.max_turns:
                logger.warning("Battle is taking too many turns: %d", self.turns)
                break
        return self.turns

    def outcome(self, cap_reached: bool | None = None) -> BattleOutcome:
        """Classify the battle as it stands.

        *cap_reached* defaults to the same test ``is_over`` applies
        (``turns > max_turns``); drivers with their own cap rule pass it in.
        """
        if cap_reached is None:
            cap_reached = self.turns > self.max_turns
        survivors = tuple(self.players)
        if len(survivors) == 1:
            kind = OutcomeKind.WINNER
        elif not survivors:
            kind = OutcomeKind.NO_SURVIVORS
        elif cap_reached:
            kind = OutcomeKind.TURN_CAP
        else:
            kind = OutcomeKind.UNFINISHED
        return BattleOutcome(kind=kind, turns=self.turns, survivors=survivors)


def simulate(
    players: Iterable[Player],
    config: SimulationConfig | None = None,
    rng: DiceRNG | None = None,
) -> BattleOutcome:
    """Run a battle to completion and return its outcome."""
    game = Game(config, rng, players)
    game.run_simulation()
    outcome = game.outcome()
    logger.info("%s", outcome.summary())
    return outcome

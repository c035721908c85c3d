"""Player name generation.

Names come from a fixed pool; when the pool repeats within one roster the
next copy gets a numeric suffix, so generated rosters are always unique.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from battlers.core.enums import Domain
from battlers.core.models import Player

if TYPE_CHECKING:
    from battlers.systems.rng import DiceRNG


PLAYER_NAMES: list[str] = [
    "Aldric", "Brenna", "Cassius", "Dagny", "Eamon", "Freya",
    "Gareth", "Hilde", "Ivor", "Jorunn", "Kael", "Liora",
    "Magnus", "Nessa", "Osric", "Petra", "Quill", "Rowena",
    "Soren", "Thora", "Ulric", "Vesna", "Wystan", "Ysolde",
]


class NameGenerator:
    """Draws names from ``PLAYER_NAMES`` using the RNG's NAMES domain."""

    __slots__ = ("_rng", "_seen")

    def __init__(self, rng: DiceRNG) -> None:
        self._rng = rng
        self._seen: dict[str, int] = {}

    def next_name(self) -> str:
        base = PLAYER_NAMES[self._rng.next_int(Domain.NAMES, 0, len(PLAYER_NAMES) - 1)]
        count = self._seen.get(base, 0) + 1
        self._seen[base] = count
        return base if count == 1 else f"{base} ({count})"

    def reset(self) -> None:
        """Forget issued names (call before building a new roster)."""
        self._seen.clear()


def random_players(count: int, rng: DiceRNG, arena_min: int = 1, arena_max: int = 60) -> list[Player]:
    """Build *count* uniquely named players with rolled attributes and positions."""
    names = NameGenerator(rng)
    players: list[Player] = []
    for _ in range(count):
        player = Player(names.next_name())
        player.randomize(rng, arena_min, arena_max)
        players.append(player)
    return players

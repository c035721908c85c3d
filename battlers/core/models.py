"""Core data models: PlayerAttribute, Location, Player."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from battlers.core.enums import AttributeKind, Domain
from battlers.systems import dice

if TYPE_CHECKING:
    from battlers.systems.rng import DiceRNG

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PlayerAttribute:
    """A named statistic with a base value and a current (depletable) value."""

    kind: AttributeKind
    base: int = 0
    curr: int = 0

    def set(self, value: int) -> None:
        self.base = value
        self.curr = value

    def bonus(self) -> int:
        """Ability modifier of the current value.

        ``int()`` truncates toward zero, so 10 → 0 and 8 → -1 rather than the
        floor values -1 and -2.
        """
        return int((self.curr - 10.5) / 2.0)

    def randomize(self, rng: DiceRNG) -> None:
        self.set(dice.roll3d6(rng, Domain.SPAWN))

    def copy(self) -> PlayerAttribute:
        return PlayerAttribute(kind=self.kind, base=self.base, curr=self.curr)


@dataclass(slots=True)
class Location:
    """Mutable 3D point; players only ever move on the z = 0 plane."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def distance(self, other: Location) -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        dz = self.z - other.z
        return math.sqrt(dx * dx + dy * dy + dz * dz)

    def randomize(self, rng: DiceRNG, low: int = 1, high: int = 60) -> None:
        self.x = float(rng.next_int(Domain.LOCATION, low, high))
        self.y = float(rng.next_int(Domain.LOCATION, low, high))
        self.z = 0.0

    def copy(self) -> Location:
        return Location(self.x, self.y, self.z)

    def __repr__(self) -> str:
        return f"({self.x:.1f}, {self.y:.1f}, {self.z:.1f})"


def _attr(kind: AttributeKind):
    return field(default_factory=lambda: PlayerAttribute(kind))


@dataclass(slots=True)
class Player:
    """A combatant: six attributes, a position and the combat rules that use them."""

    name: str
    attack: PlayerAttribute = _attr(AttributeKind.ATTACK)
    defense: PlayerAttribute = _attr(AttributeKind.DEFENSE)
    armor: PlayerAttribute = _attr(AttributeKind.ARMOR)
    power: PlayerAttribute = _attr(AttributeKind.POWER)
    speed: PlayerAttribute = _attr(AttributeKind.SPEED)
    range: PlayerAttribute = _attr(AttributeKind.RANGE)
    loc: Location = field(default_factory=Location)

    @property
    def attributes(self) -> tuple[PlayerAttribute, ...]:
        return (self.attack, self.defense, self.armor, self.power, self.speed, self.range)

    @property
    def health_ratio(self) -> float:
        """Remaining armor as a fraction of its base value."""
        return self.armor.curr / self.armor.base if self.armor.base > 0 else 0.0

    def randomize(self, rng: DiceRNG, arena_min: int = 1, arena_max: int = 60) -> None:
        for attribute in self.attributes:
            attribute.randomize(rng)
        self.loc.randomize(rng, arena_min, arena_max)

    def move_towards(self, target: Location) -> None:
        """Step straight towards *target* by exactly ``speed`` units, never overshooting.

        Does nothing when the target is already within one step.
        """
        distance = self.loc.distance(target)
        if distance <= self.speed.curr:
            return
        dx = (target.x - self.loc.x) / distance
        dy = (target.y - self.loc.y) / distance
        new_x = self.loc.x + dx * self.speed.curr
        new_y = self.loc.y + dy * self.speed.curr
        logger.debug("%s moved %.1f:%.1f -> %.1f:%.1f", self.name, self.loc.x, self.loc.y, new_x, new_y)
        self.loc.x = new_x
        self.loc.y = new_y

    def in_range(self, target: Location) -> bool:
        return self.loc.distance(target) <= self.range.curr

    def attack_roll(self, target: Player, rng: DiceRNG) -> bool:
        """Roll 1d20 to hit; ties go to the attacker."""
        roll = dice.roll1d20(rng)
        return self.attack.bonus() + roll >= target.defense.curr

    def damage(self, target: Player, rng: DiceRNG) -> int:
        """Roll damage against *target* and apply it. Returns the amount applied."""
        amount = dice.roll1d8(rng) + self.power.bonus()
        if amount < 1:
            logger.warning("%s inflicted no damage on %s", self.name, target.name)
            return 0
        target.armor.curr -= amount
        return amount

    def is_dead(self) -> bool:
        return self.armor.curr < 1

    def describe(self) -> str:
        return (
            f"{self.name} HP:{self.armor.curr}/{self.armor.base} "
            f"ATK:{self.attack.curr} DEF:{self.defense.curr} PWR:{self.power.curr} "
            f"SPD:{self.speed.curr} RNG:{self.range.curr} @ {self.loc!r}"
        )

    def copy(self) -> Player:
        return Player(
            name=self.name,
            attack=self.attack.copy(),
            defense=self.defense.copy(),
            armor=self.armor.copy(),
            power=self.power.copy(),
            speed=self.speed.copy(),
            range=self.range.copy(),
            loc=self.loc.copy(),
        )

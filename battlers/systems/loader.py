"""YAML roster loading.

Expected document::

    players:
      - name: Fred
        attack: 12
        defense: 14
        armor: 16
        power: 11
        speed: 6
        range: 3
        loc: {x: 5.0, y: 10.0, z: 0.0}

Configured players skip randomization: every attribute is set with
base = curr = the supplied value.
"""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from battlers.core.errors import ConfigError
from battlers.core.models import Location, Player

logger = logging.getLogger(__name__)


class LocationConfig(BaseModel):
    x: float
    y: float
    z: float = 0.0

    def to_location(self) -> Location:
        return Location(self.x, self.y, self.z)


class PlayerConfig(BaseModel):
    name: str = Field(min_length=1)
    attack: int
    defense: int
    armor: int
    power: int
    speed: int
    range: int
    loc: LocationConfig

    def to_player(self) -> Player:
        player = Player(self.name)
        player.attack.set(self.attack)
        player.defense.set(self.defense)
        player.armor.set(self.armor)
        player.power.set(self.power)
        player.speed.set(self.speed)
        player.range.set(self.range)
        player.loc = self.loc.to_location()
        return player

    @classmethod
    def from_player(cls, player: Player) -> PlayerConfig:
        """Inverse of :meth:`to_player`, reading base values."""
        return cls(
            name=player.name,
            attack=player.attack.base,
            defense=player.defense.base,
            armor=player.armor.base,
            power=player.power.base,
            speed=player.speed.base,
            range=player.range.base,
            loc=LocationConfig(x=player.loc.x, y=player.loc.y, z=player.loc.z),
        )


class BattleConfig(BaseModel):
    players: list[PlayerConfig] = Field(default_factory=list)


def load_simulation_config(path: str | Path) -> BattleConfig:
    """Read and validate a roster file. Raises ConfigError naming the path."""
    path = Path(path)
    logger.info("Loading simulation configuration from: %s", path)

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.error("Failed to read file %s: %s", path, exc)
        raise ConfigError(path, exc) from exc

    try:
        raw = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        logger.error("Failed to parse YAML from %s: %s", path, exc)
        raise ConfigError(path, exc) from exc

    if not isinstance(raw, dict):
        raise ConfigError(path, "top level must be a mapping with a 'players' list")

    try:
        config = BattleConfig.model_validate(raw)
    except ValidationError as exc:
        logger.error("Invalid roster in %s: %s", path, exc)
        raise ConfigError(path, exc) from exc

    duplicates = [name for name, n in Counter(p.name for p in config.players).items() if n > 1]
    if duplicates:
        logger.warning("Duplicate player names in %s: %s", path, ", ".join(duplicates))

    logger.info("Successfully loaded %d players from configuration", len(config.players))
    return config


def players_from_config(config: BattleConfig) -> list[Player]:
    players = []
    for player_config in config.players:
        player = player_config.to_player()
        logger.info("%s", player.describe())
        players.append(player)
    return players


def dump_roster(players: list[Player]) -> str:
    """Serialize players' base values back to a YAML roster document."""
    config = BattleConfig(players=[PlayerConfig.from_player(p) for p in players])
    return yaml.safe_dump(config.model_dump(), sort_keys=False)

"""Dice rolls used for attribute generation and combat resolution."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from battlers.core.enums import Domain

if TYPE_CHECKING:
    from battlers.systems.rng import DiceRNG

logger = logging.getLogger(__name__)


def _roll(rng: DiceRNG, sides: int, domain: Domain) -> int:
    roll = rng.next_int(domain, 1, sides)
    logger.debug("rolled %d/%d", roll, sides)
    return roll


def roll3d6(rng: DiceRNG, domain: Domain = Domain.SPAWN) -> int:
    """Sum of three six-sided dice, 3..18."""
    return _roll(rng, 6, domain) + _roll(rng, 6, domain) + _roll(rng, 6, domain)


def roll1d20(rng: DiceRNG, domain: Domain = Domain.ATTACK) -> int:
    return _roll(rng, 20, domain)


def roll1d8(rng: DiceRNG, domain: Domain = Domain.DAMAGE) -> int:
    return _roll(rng, 8, domain)

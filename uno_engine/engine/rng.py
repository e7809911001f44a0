"""Seeded pseudo-random numbers.

The generator is mulberry32. Its only state is ``GameState.seed``, so a
serialized game continues the exact same random stream after it is loaded.
"""

import hashlib
import logging
import secrets

from uno_engine.schemas.game_state import GameState

logger = logging.getLogger(__name__)

MASK_32 = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply."""
    return (a * b) & MASK_32


def derive_seed(value: str | int | None) -> int:
    """Turn a user-facing seed into the integer the generator starts from.

    Strings are hashed to a stable unsigned 32-bit integer, integers are used
    as-is, and ``None`` draws 32 bits of OS entropy.
    """
    if value is None:
        seed = secrets.randbits(32)
        logger.debug("No seed given, drew random seed=%d", seed)
        return seed
    if isinstance(value, str):
        digest = hashlib.sha256(value.encode("utf-8")).digest()
        seed = int.from_bytes(digest[:4], "big")
        logger.debug("Derived seed=%d from string seed", seed)
        return seed
    return value


def next_random(state: GameState) -> float:
    """Advance ``state.seed`` one step and return a float in [0, 1)."""
    state.seed = (state.seed + _INCREMENT) & MASK_32
    t = state.seed
    t = _imul(t ^ (t >> 15), t | 1)
    t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK_32
    return ((t ^ (t >> 14)) & MASK_32) / 4294967296

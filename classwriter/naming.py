from __future__ import annotations

import logging
import random
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class RNG(Protocol):
    def randint(self, a: int, b: int) -> int: ...


class RandomRNG:
    def __init__(self, seed: int | None = None) -> None:
        self._r = random.Random(seed)

    def randint(self, a: int, b: int) -> int:
        return self._r.randint(a, b)


class NameAllocator:
    """
    Hands out temporary identifiers for generated code.

    The counter alone keeps names unique within one session; the trailing
    random digit is cosmetic.
    """

    def __init__(self, prefix: str = "__v_", rng: RNG | None = None) -> None:
        self.prefix = prefix
        self.rng: RNG = rng or RandomRNG()
        self._count = 0

    @property
    def count(self) -> int:
        return self._count

    def new_var_name(self) -> str:
        self._count += 1
        name = f"{self.prefix}{self._count}_{self.rng.randint(0, 9)}"
        logger.debug("allocated temporary %s", name)
        return name

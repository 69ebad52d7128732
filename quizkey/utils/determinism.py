from __future__ import annotations

import random
from typing import Optional


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Return the uniform random source passed into the generator and shuffler.

    ``seed=None`` draws from OS entropy.
    """
    if seed is None:
        return random.SystemRandom()
    return random.Random(seed)

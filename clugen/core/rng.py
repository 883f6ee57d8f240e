from __future__ import annotations
from typing import Optional, Union
import numpy as np
from clugen.exceptions import ValidationError

RandomSource = Optional[Union[int, np.integer, np.random.Generator]]


def as_generator(rng: RandomSource = None) -> np.random.Generator:
    """Resolve ``None``, an integer seed or an existing ``Generator`` into a ``Generator``."""
    if rng is None: return np.random.default_rng()
    if isinstance(rng, np.random.Generator): return rng
    if isinstance(rng, (int, np.integer)) and not isinstance(rng, bool):
        return np.random.default_rng(int(rng))
    raise ValidationError(f"rng must be None, an integer seed or a numpy Generator, got {type(rng).__name__}")

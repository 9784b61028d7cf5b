"""Box-Muller normal sampler over an injected uniform generator."""

import math

import numpy as np


class BoxMullerNormal:
    """Normal samples from pairs of uniform draws.

    Uses the single-sample Box-Muller form: each normal value costs two
    uniforms and the sine companion is discarded. This halves throughput
    compared to the paired variant but keeps every draw independent of the
    previous one, which is an accepted simplification for this engine.
    """

    def __init__(self, rng: np.random.Generator | None = None):
        self.rng = rng if rng is not None else np.random.default_rng()

    def sample(self, mean: float, std_dev: float) -> float:
        u1 = float(self.rng.random())
        u2 = float(self.rng.random())
        while u1 == 0.0:  # log(0)
            u1 = float(self.rng.random())

        z = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
        return mean + z * std_dev

    def samples(self, mean: float, std_dev: float, size) -> np.ndarray:
        """Vectorised ``sample``: same transform applied element-wise."""
        u1 = self.rng.random(size)
        u2 = self.rng.random(size)
        zero = u1 == 0.0
        while np.any(zero):
            u1[zero] = self.rng.random(int(np.count_nonzero(zero)))
            zero = u1 == 0.0

        z = np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)
        return mean + z * std_dev

"""
Fits raw model output to the fixed dimensionality promised to clients.

- all-zero (or empty) vectors are replaced by a random unit vector
  with no zero component
- shorter vectors are right-padded with zeros
- longer vectors are rejected, never truncated
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import numpy as np

from .errors import InferenceError, NormalizationError


logger = logging.getLogger(__name__)


class ResponseNormalizer:
    def __init__(self, target_dimension: int = 768, rng: Optional[np.random.Generator] = None):
        if target_dimension <= 0:
            raise ValueError(f"target_dimension must be > 0, got {target_dimension}")
        self.target_dimension = target_dimension
        self._rng = rng if rng is not None else np.random.default_rng()

    @staticmethod
    def is_degenerate(vector: np.ndarray) -> bool:
        # An empty vector counts as degenerate: padding it would give all zeros.
        return vector.size == 0 or not np.any(vector)

    def normalize(self, vector: Sequence[float]) -> List[float]:
        arr = np.asarray(vector, dtype=np.float64).ravel()
        self._log_stats("raw", arr)

        if not np.all(np.isfinite(arr)):
            raise InferenceError("Model returned non-finite values in embedding.")

        if self.is_degenerate(arr):
            logger.debug("degenerate embedding (len=%d), generating random fallback", arr.size)
            out = self._random_unit_vector()
        elif arr.size < self.target_dimension:
            logger.debug("padding embedding from %d to %d dimensions", arr.size, self.target_dimension)
            out = np.concatenate([arr, np.zeros(self.target_dimension - arr.size)])
        elif arr.size == self.target_dimension:
            out = arr
        else:
            raise NormalizationError(
                f"Model returned {arr.size} dimensions, more than the configured "
                f"target of {self.target_dimension}.",
                code="dimension_exceeds_target",
            )

        self._log_stats("final", out)
        return out.tolist()

    def _random_unit_vector(self) -> np.ndarray:
        vec = self._rng.uniform(-1.0, 1.0, self.target_dimension)
        zeros = vec == 0.0
        while zeros.any():
            vec[zeros] = self._rng.uniform(-1.0, 1.0, int(zeros.sum()))
            zeros = vec == 0.0
        return vec / np.linalg.norm(vec)

    @staticmethod
    def _log_stats(stage: str, arr: np.ndarray) -> None:
        if not logger.isEnabledFor(logging.DEBUG):
            return
        logger.debug(
            "%s embedding: length=%d, zeros=%d, nans=%d",
            stage,
            arr.size,
            int(np.count_nonzero(arr == 0.0)),
            int(np.count_nonzero(np.isnan(arr))),
        )

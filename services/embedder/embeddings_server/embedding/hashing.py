from __future__ import annotations

import hashlib
from typing import List, Optional, Sequence

import numpy as np

from .base import BaseEmbedder


class HashEmbedder(BaseEmbedder):
    """
    Deterministic stand-in for environments without model weights.

    Each text seeds a generator from its SHA-256 digest, so the same text
    always maps to the same unit vector. Vectors carry no semantics.
    """

    def __init__(self, dimension: int = 768, model_name: str = "hash"):
        self.model_name = model_name
        self._dimension = dimension

    @property
    def dimension(self) -> Optional[int]:
        return self._dimension

    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        vectors = []
        for text in texts:
            seed = int.from_bytes(hashlib.sha256(text.encode("utf-8")).digest()[:8], "little")
            rng = np.random.default_rng(seed)
            vec = rng.standard_normal(self._dimension)
            vec = vec / np.linalg.norm(vec)
            vectors.append(vec.astype(float).tolist())
        return vectors

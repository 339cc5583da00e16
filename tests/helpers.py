from __future__ import annotations

import time
from typing import List, Optional, Sequence

from embeddings_server.embedding.base import BaseEmbedder


class FakeEmbedder(BaseEmbedder):
    """Returns a fixed vector per text and counts calls."""

    def __init__(self, vector: Optional[List[float]] = None, dimension: Optional[int] = None):
        self.model_name = "fake"
        self.vector = vector if vector is not None else [0.1, 0.2, 0.3]
        self._dimension = dimension
        self.calls: List[List[str]] = []
        self.closed = False

    @property
    def dimension(self) -> Optional[int]:
        return self._dimension

    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        self.calls.append(list(texts))
        return [list(self.vector) for _ in texts]

    def close(self) -> None:
        self.closed = True


class FailingEmbedder(FakeEmbedder):
    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        self.calls.append(list(texts))
        raise RuntimeError("CUDA out of memory")


class SlowEmbedder(FakeEmbedder):
    def __init__(self, delay: float, **kwargs):
        super().__init__(**kwargs)
        self.delay = delay

    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        time.sleep(self.delay)
        return super().embed(texts)


class ShortBatchEmbedder(FakeEmbedder):
    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        self.calls.append(list(texts))
        return [list(self.vector)]


class UpstreamTimeoutEmbedder(FakeEmbedder):
    """Fails with the provider's own read timeout, not the request deadline."""

    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        self.calls.append(list(texts))
        raise TimeoutError("upstream read timed out")

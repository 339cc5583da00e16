from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import numpy as np
from openai import OpenAI, OpenAIError

from ..errors import InferenceError, ModelInitError
from .base import BaseEmbedder


logger = logging.getLogger(__name__)


class OpenAIEmbedder(BaseEmbedder):
    """Forwards to an OpenAI-compatible /v1/embeddings upstream."""

    def __init__(
        self,
        api_key: Optional[str],
        model_name: str = "text-embedding-3-small",
        base_url: Optional[str] = None,
        dimensions: Optional[int] = None,
        timeout: float = 60.0,
    ):
        if not api_key:
            raise ModelInitError("OPENAI_API_KEY is not set for provider=openai")
        try:
            self.client = OpenAI(api_key=api_key, base_url=base_url, timeout=timeout)
        except OpenAIError as e:
            raise ModelInitError(f"Failed to create OpenAI client: {e}") from e
        self.model_name = model_name
        self.dimensions = dimensions

    @property
    def dimension(self) -> Optional[int]:
        return self.dimensions

    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        # OpenAI recommends stripping newlines
        inp = [t.replace("\n", " ") for t in texts]

        kwargs = {}
        if self.dimensions is not None:
            kwargs["dimensions"] = self.dimensions
        try:
            resp = self.client.embeddings.create(model=self.model_name, input=inp, **kwargs)
        except OpenAIError as e:
            raise InferenceError(f"Upstream embeddings call failed: {e}") from e

        data = sorted(resp.data, key=lambda d: d.index)
        if not data:
            return []
        try:
            vecs = np.array([d.embedding for d in data], dtype="float32")
        except ValueError as e:
            raise InferenceError(f"Upstream returned malformed embeddings: {e}") from e

        # Normalize for cosine consistency
        norms = np.linalg.norm(vecs, axis=1, keepdims=True) + 1e-12
        vecs = vecs / norms

        return vecs.tolist()

    def close(self) -> None:
        self.client.close()

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from sentence_transformers import SentenceTransformer

from ..errors import InferenceError, ModelInitError
from .base import BaseEmbedder


logger = logging.getLogger(__name__)


class SBERTEmbedder(BaseEmbedder):
    def __init__(
        self,
        model_name: str,
        device: str = "cpu",
        batch_size: int = 64,
        trust_remote_code: bool = True,
    ):
        self.model_name = model_name
        self.device = device
        self.batch_size = batch_size
        logger.info("loading sentence transformer %s on %s", model_name, device)
        try:
            self._model = SentenceTransformer(model_name, device=device, trust_remote_code=trust_remote_code)
        except Exception as e:
            raise ModelInitError(f"Failed to load model {model_name}: {e}") from e
        self._dimension = self._model.get_sentence_embedding_dimension()

    @property
    def dimension(self) -> Optional[int]:
        return self._dimension

    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        if self._model is None:
            raise InferenceError("Model has been closed.")
        try:
            vecs = self._model.encode(
                list(texts),
                batch_size=self.batch_size,
                convert_to_numpy=True,
                show_progress_bar=False,
                device=self.device,
                normalize_embeddings=True,   # good for cosine
            ).astype("float32")
        except Exception as e:
            raise InferenceError(f"Model inference failed: {e}") from e

        return vecs.tolist()

    def close(self) -> None:
        self._model = None

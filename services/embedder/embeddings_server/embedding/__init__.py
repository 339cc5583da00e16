from __future__ import annotations

from ..errors import ModelInitError
from ..settings import Settings
from .base import BaseEmbedder
from .hashing import HashEmbedder


def build_embedder(settings: Settings) -> BaseEmbedder:
    """
    Constructs the provider named by settings.PROVIDER.
    Heavy imports happen here so that only the selected backend is loaded.
    """
    provider = settings.PROVIDER

    if provider == "sbert":
        from .sbert import SBERTEmbedder

        return SBERTEmbedder(
            model_name=settings.SBERT_MODEL,
            device=settings.DEVICE,
            batch_size=settings.SBERT_BATCH_SIZE,
            trust_remote_code=settings.TRUST_REMOTE_CODE,
        )
    if provider == "openai":
        from .openai_embed import OpenAIEmbedder

        return OpenAIEmbedder(
            api_key=settings.OPENAI_API_KEY,
            model_name=settings.OPENAI_MODEL,
            base_url=settings.OPENAI_BASE_URL,
            dimensions=settings.OPENAI_DIMENSIONS,
            timeout=settings.OPENAI_TIMEOUT,
        )
    if provider == "hash":
        return HashEmbedder(dimension=settings.TARGET_DIMENSION)

    raise ModelInitError(f"Unknown provider: {provider}")


__all__ = ["BaseEmbedder", "HashEmbedder", "build_embedder"]

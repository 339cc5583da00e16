from __future__ import annotations

from typing import List, Sequence

from .schemas import EmbeddingData, EmbeddingsResponse, Usage


def build_response(embeddings: Sequence[List[float]], model_name: str) -> EmbeddingsResponse:
    """
    Wraps normalized vectors in the OpenAI /v1/embeddings envelope.
    Token accounting is not done; usage is always zero.
    """
    return EmbeddingsResponse(
        data=[EmbeddingData(index=i, embedding=vec) for i, vec in enumerate(embeddings)],
        model=model_name,
        usage=Usage(prompt_tokens=0, total_tokens=0),
    )

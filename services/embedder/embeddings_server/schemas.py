from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


class EmbeddingsRequest(BaseModel):
    model: str = Field(..., description="Model identifier, echoed back in the response")
    input: List[str] = Field(..., min_length=1, description="Texts to embed")
    user: Optional[str] = Field(None, description="Opaque end-user id (unused)")

    @field_validator("input", mode="before")
    @classmethod
    def _wrap_single_text(cls, value: Union[str, List[str]]):
        # OpenAI clients may send a bare string
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("input")
    @classmethod
    def _reject_blank_texts(cls, value: List[str]) -> List[str]:
        for i, text in enumerate(value):
            if not text.strip():
                raise ValueError(f"input[{i}] is empty")
        return value


class EmbeddingData(BaseModel):
    object: Literal["embedding"] = "embedding"
    index: int
    embedding: List[float]


class Usage(BaseModel):
    prompt_tokens: int = 0
    total_tokens: int = 0


class EmbeddingsResponse(BaseModel):
    object: Literal["list"] = "list"
    data: List[EmbeddingData]
    model: str
    usage: Usage = Field(default_factory=Usage)


class ErrorDetail(BaseModel):
    message: str
    type: str
    code: Optional[str] = None


class ErrorResponse(BaseModel):
    error: ErrorDetail


class HealthResponse(BaseModel):
    status: str
    provider: str
    model: str
    dimension: Optional[int] = None
    target_dimension: int

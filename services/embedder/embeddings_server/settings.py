from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


ProviderName = Literal["sbert", "openai", "hash"]


class Settings(BaseSettings):
    # ========================
    # Server
    # ========================
    HOST: str = Field(default="0.0.0.0", description="Listen address")
    PORT: int = Field(default=8080, ge=1, le=65535, description="Listen port")
    LOG_LEVEL: str = Field(
        default="info",
        description="Level or filter expression, e.g. 'info,embeddings_server.normalizer=debug'",
    )

    # ========================
    # Pipeline
    # ========================
    PROVIDER: ProviderName = Field(default="sbert", description="Embedding provider loaded at startup")
    TARGET_DIMENSION: int = Field(default=768, gt=0, description="Length of every returned embedding")
    RANDOM_SEED: Optional[int] = Field(default=None, description="Seed for the degenerate-vector fallback")
    MAX_CONCURRENT_REQUESTS: int = Field(default=4, ge=1, description="Concurrent model invocations")
    REQUEST_TIMEOUT: float = Field(default=30.0, ge=0, description="Inference deadline in seconds (0 disables)")

    # SBERT config
    SBERT_MODEL: str = Field(default="nomic-ai/nomic-embed-text-v1.5")
    DEVICE: str = Field(default="cpu")  # "cpu" or "cuda"
    SBERT_BATCH_SIZE: int = Field(default=64, ge=1, le=512)
    TRUST_REMOTE_CODE: bool = Field(default=True)

    # OpenAI-compatible upstream config
    OPENAI_MODEL: str = Field(default="text-embedding-3-small")
    OPENAI_API_KEY: Optional[str] = Field(default=None)
    OPENAI_BASE_URL: Optional[str] = Field(default=None)
    OPENAI_DIMENSIONS: Optional[int] = Field(default=None, gt=0)
    OPENAI_TIMEOUT: float = Field(default=60.0, gt=0)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def request_timeout(self) -> Optional[float]:
        return self.REQUEST_TIMEOUT or None


# Singleton-style settings object
settings = Settings()

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from embeddings_server.main import create_app
from embeddings_server.settings import Settings

from tests.helpers import FakeEmbedder


@pytest.fixture
def cfg() -> Settings:
    return Settings(
        PROVIDER="hash",
        TARGET_DIMENSION=768,
        RANDOM_SEED=1234,
        MAX_CONCURRENT_REQUESTS=2,
        REQUEST_TIMEOUT=5,
    )


@pytest.fixture
def fake_embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def client(cfg, fake_embedder):
    app = create_app(cfg, embedder=fake_embedder)
    with TestClient(app) as test_client:
        yield test_client

from __future__ import annotations

import asyncio
import logging
import time
from typing import List, Optional

from .embedding.base import BaseEmbedder
from .errors import InferenceError, InferenceTimeout
from .formatter import build_response
from .normalizer import ResponseNormalizer
from .schemas import EmbeddingsRequest, EmbeddingsResponse


logger = logging.getLogger(__name__)


class EmbeddingPipeline:
    """
    Per-request flow: provider.embed -> normalizer.normalize -> build_response.

    The provider is shared by all requests. At most `max_concurrency`
    inferences run at once, each in the default thread-pool executor. A slot
    is held until the model call returns, so abandoned calls still count.
    `timeout` seconds (None disables the deadline) covers both waiting for
    a slot and the inference itself.
    """

    def __init__(
        self,
        provider: BaseEmbedder,
        normalizer: ResponseNormalizer,
        max_concurrency: int = 4,
        timeout: Optional[float] = None,
    ):
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.provider = provider
        self.normalizer = normalizer
        self.timeout = timeout
        self._semaphore = asyncio.Semaphore(max_concurrency)

    async def run(self, req: EmbeddingsRequest) -> EmbeddingsResponse:
        vectors = await self._embed(req.input)
        normalized = [self.normalizer.normalize(vec) for vec in vectors]
        return build_response(normalized, req.model)

    async def _embed(self, texts: List[str]) -> List[List[float]]:
        loop = asyncio.get_running_loop()
        start = time.perf_counter()
        future = None

        async def invoke() -> List[List[float]]:
            nonlocal future
            await self._semaphore.acquire()
            try:
                future = loop.run_in_executor(None, self.provider.embed, texts)
            except BaseException:
                self._semaphore.release()
                raise
            # The slot stays taken until the model call returns, even if the request gives up.
            future.add_done_callback(lambda _: self._semaphore.release())
            return await asyncio.shield(future)

        try:
            vectors = await asyncio.wait_for(invoke(), timeout=self.timeout)
        except InferenceError:
            raise
        except asyncio.TimeoutError as e:
            if self.timeout is not None and (future is None or not future.done()):
                raise InferenceTimeout(f"Inference exceeded the {self.timeout:g}s deadline.") from None
            raise InferenceError(f"Model inference failed: {e}") from e
        except Exception as e:
            raise InferenceError(f"Model inference failed: {e}") from e

        logger.debug("embedded %d texts in %.3fs", len(texts), time.perf_counter() - start)

        if len(vectors) != len(texts):
            raise InferenceError(f"Model returned {len(vectors)} embeddings for {len(texts)} inputs.")
        return vectors

from __future__ import annotations

from typing import List, Optional, Sequence


class BaseEmbedder:
    """Base class for embedding providers."""

    model_name: str = ""

    @property
    def dimension(self) -> Optional[int]:
        """Native output size, or None when it is only known after inference."""
        return None

    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        """Returns one vector per text, in input order."""
        raise NotImplementedError

    def close(self) -> None:
        pass

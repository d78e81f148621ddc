"""
Sentence Transformer Oracle - Lazily loaded text embedding model.

Features:
- Explicit load state machine (uninitialized / loading / ready / failed)
- Concurrent initializers join one in-flight load
- Failed loads can be retried
- Encoding runs in a worker thread with a bounded timeout
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

import numpy as np
from sentence_transformers import SentenceTransformer

from vibesearch.config.errors import EmbeddingError, ModelLoadError, SearchTimeoutError

logger = logging.getLogger(__name__)

__all__ = ["ModelState", "SentenceTransformerOracle"]


class ModelState(str, Enum):
    """Lifecycle of the embedding model handle."""

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class SentenceTransformerOracle:
    """
    Embedding oracle backed by a sentence-transformers model.

    Example:
        >>> oracle = SentenceTransformerOracle("sentence-transformers/all-MiniLM-L6-v2")
        >>> await oracle.initialize()
        >>> vector = await oracle.embed("cozy coffee shop")
        >>> len(vector)
        384
    """

    def __init__(
        self,
        model_name: str = "sentence-transformers/all-MiniLM-L6-v2",
        timeout: float = 30.0,
        load_timeout: float = 300.0,
        loader: Callable[[str], Any] | None = None,
    ) -> None:
        """
        Initialize oracle without loading the model.

        Args:
            model_name: Sentence transformer model name
            timeout: Per-call encode timeout in seconds
            load_timeout: Model load timeout in seconds
            loader: Callable building the model from its name
        """
        self.model_name = model_name
        self.timeout = timeout
        self.load_timeout = load_timeout
        self._loader = loader or SentenceTransformer

        self._model: Any | None = None
        self._state = ModelState.UNINITIALIZED
        self._load_task: asyncio.Task[Any] | None = None
        self._last_error: str | None = None

    @property
    def state(self) -> ModelState:
        return self._state

    @property
    def last_error(self) -> str | None:
        return self._last_error

    async def initialize(self) -> None:
        """
        Load the model once.

        Concurrent callers await the same load. A failed load leaves the
        handle in FAILED and the next call starts a fresh attempt.

        Raises:
            ModelLoadError: Loading failed or timed out
        """
        if self._state is ModelState.READY:
            return

        if self._load_task is None:
            self._state = ModelState.LOADING
            self._load_task = asyncio.create_task(self._load())
            logger.info("Loading embedding model %s", self.model_name)

        task = self._load_task
        try:
            # shield so one cancelled waiter does not cancel the shared load
            await asyncio.shield(task)
        except ModelLoadError:
            if self._load_task is task:
                self._load_task = None
            raise

    async def _load(self) -> None:
        try:
            model = await asyncio.wait_for(
                asyncio.to_thread(self._loader, self.model_name),
                timeout=self.load_timeout,
            )
        except asyncio.TimeoutError as e:
            self._fail(f"timed out after {self.load_timeout:.0f}s")
            raise ModelLoadError(
                f"Failed to load model {self.model_name}: timed out",
                {"model": self.model_name},
            ) from e
        except Exception as e:
            self._fail(str(e))
            raise ModelLoadError(
                f"Failed to load model {self.model_name}: {e}",
                {"model": self.model_name},
            ) from e

        self._model = model
        self._state = ModelState.READY
        self._last_error = None
        logger.info("Embedding model ready: %s", self.model_name)

    def _fail(self, reason: str) -> None:
        self._state = ModelState.FAILED
        self._last_error = reason
        logger.error("Embedding model %s failed to load: %s", self.model_name, reason)

    async def embed(self, text: str) -> np.ndarray:
        """
        Embed one text.

        Args:
            text: Input text

        Returns:
            1-D float vector (not normalized)

        Raises:
            ModelLoadError: Model could not be loaded
            SearchTimeoutError: Encoding exceeded the timeout
            EmbeddingError: Encoding failed
        """
        await self.initialize()
        assert self._model is not None  # Guaranteed by initialize()

        try:
            vector = await asyncio.wait_for(
                asyncio.to_thread(
                    self._model.encode,
                    text,
                    show_progress_bar=False,
                    normalize_embeddings=False,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise SearchTimeoutError("embedding", self.timeout) from e
        except Exception as e:
            raise EmbeddingError(f"Embedding failed: {e}", {"text": text[:50]}) from e

        return np.asarray(vector, dtype=np.float32).ravel()

    def stats(self) -> dict[str, Any]:
        """Get oracle status."""
        return {
            "model": self.model_name,
            "state": self._state.value,
            "last_error": self._last_error,
        }

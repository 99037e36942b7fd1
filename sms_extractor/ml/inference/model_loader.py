"""
Backend Loader - owns the single learned-model handle shared by all requests
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from enum import IntEnum
from pathlib import Path
from typing import Callable, Optional

import structlog

from sms_extractor.ml.backends import BACKEND_FACTORIES, Backend, BackendSignal
from sms_extractor.ml.features import FeatureEncoder
from sms_extractor.services.normalizer import NormalizedText, normalize

logger = structlog.get_logger()


class ModelStatus(IntEnum):
    AVAILABLE = 1
    UNAVAILABLE = 2
    DOWNLOADING = 3
    DOWNLOADABLE = 4


StatusCallback = Callable[[ModelStatus], None]


class BackendLoader:
    """
    Loads the configured backend once, in the background, and runs inference.

    Readiness: the loader is ready once loading has finished, whether it
    succeeded (AVAILABLE) or not (UNAVAILABLE). Without a configured backend it
    is ready immediately and every call uses heuristics.

    Notification: at most one status callback is pending at a time. Registering
    a new one replaces the previous, and it fires once when loading finishes
    (immediately if it already has).

    Inference never raises. Failures and timeouts are logged and reported as
    "no signal" so the caller falls back to heuristics.
    """

    def __init__(
        self,
        factory: Optional[Callable[[bytes], Backend]] = None,
        model_path: Optional[str] = None,
        encoder: Optional[FeatureEncoder] = None,
        inference_timeout: float = 2.0,
        inference_workers: int = 2
    ):
        self.factory = factory
        self.model_path = model_path
        self.encoder = encoder or FeatureEncoder()
        self.inference_timeout = inference_timeout
        self.inference_workers = max(1, inference_workers)

        self.backend: Optional[Backend] = None
        self._lock = threading.Lock()
        self._ready = threading.Event()
        self._pending_callback: Optional[StatusCallback] = None
        self._load_future: Optional[Future] = None
        self._loader_executor: Optional[ThreadPoolExecutor] = None
        self._inference_executor: Optional[ThreadPoolExecutor] = None

        if factory is None:
            self._status = ModelStatus.UNAVAILABLE
            self._ready.set()
        else:
            self._status = ModelStatus.DOWNLOADABLE

    @classmethod
    def from_settings(cls, settings) -> "BackendLoader":
        factory = None
        if settings.MODEL_BACKEND and settings.MODEL_BACKEND != "none":
            factory = BACKEND_FACTORIES.get(settings.MODEL_BACKEND)
            if factory is None:
                logger.warning("unknown_model_backend", backend=settings.MODEL_BACKEND)

        return cls(
            factory=factory,
            model_path=settings.MODEL_PATH,
            encoder=FeatureEncoder(settings.FEATURE_DIM),
            inference_timeout=settings.INFERENCE_TIMEOUT_SECONDS,
            inference_workers=settings.INFERENCE_WORKERS
        )

    @property
    def status(self) -> ModelStatus:
        return self._status

    @property
    def is_ready(self) -> bool:
        return self._ready.is_set()

    @property
    def is_available(self) -> bool:
        return self.backend is not None

    def wait_ready(self, timeout: Optional[float] = None) -> bool:
        return self._ready.wait(timeout)

    def start(self, model_bytes: Optional[bytes] = None) -> Future:
        """
        Begin loading on a background thread

        Model bytes are read from model_path unless given. Calling start again
        returns the same future.
        """
        with self._lock:
            if self._load_future is not None:
                return self._load_future

            if self.factory is None:
                future: Future = Future()
                future.set_result(None)
                self._load_future = future
                return future

            self._status = ModelStatus.DOWNLOADING
            self._loader_executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="backend-loader")
            self._load_future = self._loader_executor.submit(self._load, model_bytes)
            return self._load_future

    def _read_model_bytes(self) -> bytes:
        if not self.model_path:
            raise FileNotFoundError("MODEL_PATH is not configured")
        return Path(self.model_path).read_bytes()

    def _load(self, model_bytes: Optional[bytes]) -> Optional[Backend]:
        try:
            if model_bytes is None:
                model_bytes = self._read_model_bytes()

            backend = self.factory(model_bytes)

            workers = self.inference_workers if backend.supports_concurrent_inference else 1
            self._inference_executor = ThreadPoolExecutor(
                max_workers=workers, thread_name_prefix="backend-inference"
            )
            self.backend = backend
            self._status = ModelStatus.AVAILABLE
            logger.info("backend_loaded", backend=backend.name, workers=workers)

        except Exception as e:
            # Heuristics stay available, so a failed load still counts as ready
            self.backend = None
            self._status = ModelStatus.UNAVAILABLE
            logger.warning("backend_load_failed", error=str(e))

        finally:
            self._ready.set()
            self._notify()

        return self.backend

    def on_status(self, callback: StatusCallback) -> None:
        """Register the single pending status callback"""
        with self._lock:
            if not self._ready.is_set():
                self._pending_callback = callback
                return
        callback(self._status)

    def _notify(self) -> None:
        with self._lock:
            callback, self._pending_callback = self._pending_callback, None
        if callback is not None:
            try:
                callback(self._status)
            except Exception as e:
                logger.warning("status_callback_failed", error=str(e))

    def infer(self, normalized: NormalizedText) -> Optional[BackendSignal]:
        """Run the backend on one message, or return None if it cannot help"""
        backend = self.backend
        if backend is None or self._inference_executor is None:
            return None

        try:
            features = self.encoder.encode(normalized)
            future = self._inference_executor.submit(backend.infer, features)
            return future.result(timeout=self.inference_timeout)
        except FutureTimeoutError:
            # Drop the call if it is still queued behind a stalled one
            cancelled = future.cancel()
            logger.warning(
                "backend_inference_timeout",
                backend=backend.name,
                timeout=self.inference_timeout,
                cancelled=cancelled
            )
        except Exception as e:
            logger.warning("backend_inference_failed", backend=backend.name, error=str(e))
        return None

    def warmup(self) -> bool:
        """Run one dummy inference so the first real call is fast"""
        if self.backend is None:
            return False
        return self.infer(normalize("warmup")) is not None

    def close(self):
        """Release the backend and stop worker threads"""
        self.backend = None
        for executor in (self._inference_executor, self._loader_executor):
            if executor is not None:
                executor.shutdown(wait=False)
        self._inference_executor = None
        self._loader_executor = None

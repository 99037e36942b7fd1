# sms_extractor/ml/backends/__init__.py
from typing import Callable, Dict

from sms_extractor.core.errors import BackendLoadError

from .base import Backend, BackendSignal
from .sklearn_backend import SklearnBackend
from .xgboost_backend import XGBoostBackend

BACKEND_FACTORIES: Dict[str, Callable[[bytes], Backend]] = {
    "sklearn": SklearnBackend.from_bytes,
    "xgboost": XGBoostBackend.from_bytes,
}


def load_backend(kind: str, model_bytes: bytes) -> Backend:
    """Build the configured backend from serialized model bytes"""
    factory = BACKEND_FACTORIES.get(kind)
    if factory is None:
        raise BackendLoadError(f"Unknown model backend: {kind}")
    return factory(model_bytes)


__all__ = [
    "Backend",
    "BackendSignal",
    "SklearnBackend",
    "XGBoostBackend",
    "BACKEND_FACTORIES",
    "load_backend",
]

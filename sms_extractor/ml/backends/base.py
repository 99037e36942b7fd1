from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Protocol, Tuple, runtime_checkable

import numpy as np


@dataclass(frozen=True)
class BackendSignal:
    """
    Output of one backend inference call.

    type_probabilities is ordered credit, debit and optionally unknown.
    type_confidence is the backend's own confidence in that decision.
    """
    type_probabilities: Tuple[float, ...]
    type_confidence: float
    amount: Optional[Decimal] = None
    fraud_probability: Optional[float] = None

    @classmethod
    def from_probabilities(
        cls,
        probabilities,
        amount: Optional[Decimal] = None,
        fraud_probability: Optional[float] = None
    ) -> "BackendSignal":
        values = tuple(float(p) for p in probabilities)
        return cls(
            type_probabilities=values,
            type_confidence=max(values) if values else 0.0,
            amount=amount,
            fraud_probability=fraud_probability
        )


@runtime_checkable
class Backend(Protocol):
    """
    A loaded learned model that scores one feature vector at a time.

    Implementations raise on any failure; the loader turns failures into
    heuristic fallback.
    """
    name: str
    n_features: int
    supports_concurrent_inference: bool

    def infer(self, features: np.ndarray) -> BackendSignal:
        ...

"""
scikit-learn backend: a joblib bundle of fitted estimators.

The bundle is a dict with a required "type_model" (a classifier with
predict_proba over credit/debit and optionally unknown, labeled either by
name or as 0/1/2), an optional "fraud_model" (binary classifier, positive
class 1, True or "fraud") and an optional "amount_model" (regressor).
"""

import io
import math
from decimal import Decimal
from typing import List, Optional

import joblib
import numpy as np

from sms_extractor.core.errors import BackendInferenceError, BackendLoadError
from sms_extractor.ml.backends.base import BackendSignal

TYPE_LABELS = ("credit", "debit", "unknown")
FRAUD_LABELS = (1, True, "fraud")


def _type_columns(classes) -> List[int]:
    """Column index of each canonical type label in predict_proba output"""
    columns = []
    for position, label in enumerate(TYPE_LABELS):
        index = None
        for i, cls in enumerate(classes):
            if isinstance(cls, str) and cls.lower() == label:
                index = i
            elif isinstance(cls, (int, np.integer)) and not isinstance(cls, bool) and cls == position:
                index = i
        columns.append(index)

    if columns[0] is None or columns[1] is None:
        raise BackendLoadError(f"Type model classes {list(classes)} lack credit/debit labels")
    return [c for c in columns if c is not None]


def _positive_column(classes) -> int:
    for i, cls in enumerate(classes):
        if cls in FRAUD_LABELS:
            return i
    return len(classes) - 1


def dump_bundle(type_model, fraud_model=None, amount_model=None) -> bytes:
    """Serialize fitted estimators into the bytes SklearnBackend.from_bytes reads"""
    buffer = io.BytesIO()
    joblib.dump(
        {"type_model": type_model, "fraud_model": fraud_model, "amount_model": amount_model},
        buffer
    )
    return buffer.getvalue()


class SklearnBackend:
    name = "sklearn"
    supports_concurrent_inference = True

    def __init__(self, type_model, fraud_model=None, amount_model=None):
        self.type_model = type_model
        self.fraud_model = fraud_model
        self.amount_model = amount_model

        self.n_features = int(type_model.n_features_in_)
        self.type_columns = _type_columns(type_model.classes_)
        self.fraud_column = _positive_column(fraud_model.classes_) if fraud_model is not None else None

    @classmethod
    def from_bytes(cls, model_bytes: bytes) -> "SklearnBackend":
        """Load the estimator bundle"""
        try:
            bundle = joblib.load(io.BytesIO(model_bytes))
        except Exception as e:
            raise BackendLoadError(f"Could not read sklearn bundle: {e}") from e

        if not isinstance(bundle, dict) or bundle.get("type_model") is None:
            raise BackendLoadError("sklearn bundle must be a dict with a 'type_model'")

        try:
            return cls(
                bundle["type_model"],
                fraud_model=bundle.get("fraud_model"),
                amount_model=bundle.get("amount_model")
            )
        except AttributeError as e:
            raise BackendLoadError(f"Bundle holds an unfitted estimator: {e}") from e

    def _amount(self, X: np.ndarray) -> Optional[Decimal]:
        if self.amount_model is None:
            return None
        value = float(self.amount_model.predict(X)[0])
        if not math.isfinite(value) or value <= 0:
            return None
        return Decimal(f"{value:.2f}")

    def infer(self, features: np.ndarray) -> BackendSignal:
        X = np.asarray(features, dtype=np.float32).reshape(1, -1)
        if X.shape[1] != self.n_features:
            raise BackendInferenceError(
                f"Expected {self.n_features} features, got {X.shape[1]}"
            )

        probabilities = self.type_model.predict_proba(X)[0]

        fraud_probability = None
        if self.fraud_model is not None:
            fraud_probability = float(self.fraud_model.predict_proba(X)[0][self.fraud_column])

        return BackendSignal.from_probabilities(
            [probabilities[i] for i in self.type_columns],
            amount=self._amount(X),
            fraud_probability=fraud_probability
        )

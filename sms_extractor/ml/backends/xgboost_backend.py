"""
XGBoost backend: a native booster that scores transaction type only.

Supported objectives are multi:softprob with 2 or 3 classes
(credit, debit, unknown) and binary:logistic (probability of debit).
"""

import json

import numpy as np
import xgboost as xgb

from sms_extractor.core.errors import BackendInferenceError, BackendLoadError
from sms_extractor.ml.backends.base import BackendSignal


class XGBoostBackend:
    name = "xgboost"
    # Booster prediction is serialized through a single worker
    supports_concurrent_inference = False

    def __init__(self, booster: xgb.Booster):
        self.booster = booster
        self.n_features = booster.num_features()

        config = json.loads(booster.save_config())
        self.num_class = int(config["learner"]["learner_model_param"].get("num_class", "0"))

        if self.num_class not in (0, 2, 3):
            raise BackendLoadError(f"Unsupported number of type classes: {self.num_class}")

    @classmethod
    def from_bytes(cls, model_bytes: bytes) -> "XGBoostBackend":
        booster = xgb.Booster()
        try:
            booster.load_model(bytearray(model_bytes))
        except xgb.core.XGBoostError as e:
            raise BackendLoadError(f"Could not read XGBoost model: {e}") from e
        return cls(booster)

    def infer(self, features: np.ndarray) -> BackendSignal:
        X = np.asarray(features, dtype=np.float32).reshape(1, -1)
        if X.shape[1] != self.n_features:
            raise BackendInferenceError(
                f"Expected {self.n_features} features, got {X.shape[1]}"
            )

        prediction = np.asarray(self.booster.predict(xgb.DMatrix(X)))

        if self.num_class == 0:
            debit = float(prediction.reshape(-1)[0])
            return BackendSignal.from_probabilities([1.0 - debit, debit])

        return BackendSignal.from_probabilities(prediction.reshape(-1)[:self.num_class])

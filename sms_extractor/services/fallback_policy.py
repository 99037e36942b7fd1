"""
Chooses between backend output and the heuristic components
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from sms_extractor.ml.backends.base import BackendSignal
from sms_extractor.schemas.transaction import TransactionType
from sms_extractor.services.amount_extractor import AmountExtractor
from sms_extractor.services.fraud_detector import FraudDetector
from sms_extractor.services.normalizer import NormalizedText
from sms_extractor.services.type_classifier import TypeClassifier, classify_probabilities

SOURCE_BACKEND = "backend"
SOURCE_HEURISTIC = "heuristic"


@dataclass(frozen=True)
class Resolution:
    transaction_type: Optional[TransactionType]
    amount: Optional[Decimal]
    fraud: bool
    source: str


class FallbackPolicy:
    """
    Tiered decision between an optional backend signal and heuristics.

    1. Backend fraud probability above the fraud threshold: fraud.
    2. Backend type confidence above the type threshold: backend type, and
       backend amount when it supplies one, else the amount extractor.
    3. Otherwise keyword type and cascade amount.

    The heuristic fraud detector runs in every case; a hit from either side
    marks the message as fraud. Unknown types are left to the aggregator.
    """

    def __init__(
        self,
        fraud_detector: FraudDetector,
        type_classifier: TypeClassifier,
        amount_extractor: AmountExtractor,
        type_threshold: float = 0.5,
        fraud_threshold: float = 0.5
    ):
        self.fraud_detector = fraud_detector
        self.type_classifier = type_classifier
        self.amount_extractor = amount_extractor
        self.type_threshold = type_threshold
        self.fraud_threshold = fraud_threshold

    def _backend_fraud(self, signal: Optional[BackendSignal]) -> bool:
        return (
            signal is not None
            and signal.fraud_probability is not None
            and signal.fraud_probability > self.fraud_threshold
        )

    def _backend_is_confident(self, signal: Optional[BackendSignal]) -> bool:
        return signal is not None and signal.type_confidence > self.type_threshold

    def resolve(
        self,
        raw_text: Optional[str],
        normalized: NormalizedText,
        signal: Optional[BackendSignal] = None
    ) -> Resolution:
        if self._backend_fraud(signal):
            return Resolution(None, None, True, SOURCE_BACKEND)

        if self.fraud_detector.is_fraud(normalized):
            return Resolution(None, None, True, SOURCE_HEURISTIC)

        if self._backend_is_confident(signal):
            transaction_type = classify_probabilities(
                signal.type_probabilities, threshold=self.type_threshold
            )
            amount = signal.amount if signal.amount is not None and signal.amount > 0 else None
            if amount is None:
                amount = self.amount_extractor.extract(raw_text)
            return Resolution(transaction_type, amount, False, SOURCE_BACKEND)

        return Resolution(
            self.type_classifier.classify(normalized),
            self.amount_extractor.extract(raw_text),
            False,
            SOURCE_HEURISTIC
        )

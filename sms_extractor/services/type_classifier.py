"""
Credit/debit classification.

Two interchangeable strategies: keyword scoring over the normalized text,
and argmax over a backend's class probabilities.
"""

from typing import Iterable, Sequence, Tuple

from sms_extractor.schemas.transaction import TransactionType
from sms_extractor.services.normalizer import NormalizedText

# Class order of backend probability vectors
PROBABILITY_CLASSES = (TransactionType.CREDIT, TransactionType.DEBIT, TransactionType.UNKNOWN)

DEFAULT_PROBABILITY_THRESHOLD = 0.5


class TypeClassifier:
    """Keyword-scoring strategy"""

    def __init__(self, credit_keywords: Iterable[str], debit_keywords: Iterable[str]):
        self.credit_keywords = tuple(k.lower() for k in credit_keywords)
        self.debit_keywords = tuple(k.lower() for k in debit_keywords)

    def score(self, normalized: NormalizedText) -> Tuple[int, int]:
        """
        Count how many credit and debit keywords occur in the text

        Each keyword counts once, and overlapping keywords count separately
        ("credited" matches both "credited" and "credit").
        """
        text = normalized.text
        credit_score = sum(1 for keyword in self.credit_keywords if keyword in text)
        debit_score = sum(1 for keyword in self.debit_keywords if keyword in text)
        return credit_score, debit_score

    def classify(self, normalized: NormalizedText) -> TransactionType:
        credit_score, debit_score = self.score(normalized)

        if credit_score > debit_score and credit_score > 0:
            return TransactionType.CREDIT
        if debit_score > credit_score and debit_score > 0:
            return TransactionType.DEBIT
        return TransactionType.UNKNOWN


def classify_probabilities(
    probabilities: Sequence[float],
    threshold: float = DEFAULT_PROBABILITY_THRESHOLD
) -> TransactionType:
    """
    Model-backed strategy: pick the most probable class above the threshold

    Probabilities are ordered credit, debit and optionally unknown. A winning
    third class, a tie for the top spot, or a top probability at or below the
    threshold all give UNKNOWN.
    """
    if len(probabilities) < 2:
        return TransactionType.UNKNOWN

    values = [float(p) for p in probabilities[:len(PROBABILITY_CLASSES)]]
    best = max(range(len(values)), key=lambda i: values[i])

    if values.count(values[best]) > 1 or values[best] <= threshold:
        return TransactionType.UNKNOWN
    return PROBABILITY_CLASSES[best]

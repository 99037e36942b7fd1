from typing import Iterable, Optional

from sms_extractor.services.normalizer import NormalizedText


class FraudDetector:
    """
    Flags phishing and non-transactional messages.

    Presence of a single indicator phrase is enough. False positives on
    legitimate messages are accepted, since a fraud result suppresses
    every other field.
    """

    def __init__(self, indicators: Iterable[str]):
        self.indicators = tuple(i.lower() for i in indicators)

    def matched_indicator(self, normalized: NormalizedText) -> Optional[str]:
        """Return the first indicator found in the text, if any"""
        for indicator in self.indicators:
            if indicator in normalized.text:
                return indicator
        return None

    def is_fraud(self, normalized: NormalizedText) -> bool:
        return self.matched_indicator(normalized) is not None

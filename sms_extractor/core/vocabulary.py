"""
Keyword vocabularies used by the heuristic components.

Loaded once at startup and passed explicitly into the detectors and
classifiers. A JSON file may override any of the lists.
"""

import json
from pathlib import Path
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

FRAUD_INDICATORS = (
    "urgent", "verify", "suspended", "click here", "link", "password",
    "account locked", "verify now", "immediately", "act now", "limited time",
    "prize", "winner", "congratulations", "free money", "claim now",
    "phishing", "scam", "suspicious", "verify account", "update now",
)

CREDIT_KEYWORDS = (
    "credited", "credit", "received", "deposit", "income", "salary",
    "refund", "cashback", "reward", "bonus", "incoming", "added",
)

DEBIT_KEYWORDS = (
    "debited", "debit", "paid", "payment", "purchase", "withdrawal",
    "transfer", "sent", "outgoing", "spent", "expense", "deducted",
)

# Canonical display names, matched case-insensitively
KNOWN_MERCHANTS = (
    "Amazon", "Flipkart", "Swiggy", "Zomato", "Uber", "Ola",
    "Paytm", "PhonePe", "GPay", "Razorpay", "Stripe", "Netflix",
)


class Vocabulary(BaseModel):
    """Immutable keyword tables for fraud, type and merchant matching"""

    fraud_indicators: Tuple[str, ...] = FRAUD_INDICATORS
    credit_keywords: Tuple[str, ...] = CREDIT_KEYWORDS
    debit_keywords: Tuple[str, ...] = DEBIT_KEYWORDS
    merchants: Tuple[str, ...] = KNOWN_MERCHANTS

    model_config = ConfigDict(frozen=True)

    @field_validator("fraud_indicators", "credit_keywords", "debit_keywords")
    @classmethod
    def _lowercase(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        # Matching runs against lower-cased text
        return tuple(v.strip().lower() for v in value if v.strip())

    @field_validator("merchants")
    @classmethod
    def _strip(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        return tuple(v.strip() for v in value if v.strip())


def load_vocabulary(path: Optional[str] = None) -> Vocabulary:
    """
    Build the vocabulary from defaults, overridden by a JSON file if given

    The file holds an object with any of the keys fraud_indicators,
    credit_keywords, debit_keywords and merchants, each a list of strings.
    """
    if not path:
        return Vocabulary()

    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return Vocabulary(**data)

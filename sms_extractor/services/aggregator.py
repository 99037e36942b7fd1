"""
Final assembly of the extraction result
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from sms_extractor.schemas.transaction import TransactionResult, TransactionType
from sms_extractor.services.description import DescriptionSynthesizer


class UnknownTypePolicy(str, Enum):
    """What to emit when the type could not be decided"""
    NULLIFY = "nullify"  # all fields null, fraud false
    SURFACE = "surface"  # type "unknown" with amount and description
    FRAUD = "fraud"  # treated as a suspicious message


class ResultAggregator:
    """
    Applies the fraud override and the unknown-type policy, then builds the result
    """

    def __init__(
        self,
        synthesizer: DescriptionSynthesizer,
        unknown_policy: UnknownTypePolicy = UnknownTypePolicy.NULLIFY
    ):
        self.synthesizer = synthesizer
        self.unknown_policy = UnknownTypePolicy(unknown_policy)

    def aggregate(
        self,
        fraud: bool,
        transaction_type: Optional[TransactionType],
        amount: Optional[Decimal],
        entity: Optional[str]
    ) -> TransactionResult:
        if fraud:
            return TransactionResult(fraud=True)

        transaction_type = transaction_type or TransactionType.UNKNOWN

        if transaction_type == TransactionType.UNKNOWN:
            if self.unknown_policy == UnknownTypePolicy.FRAUD:
                return TransactionResult(fraud=True)
            if self.unknown_policy == UnknownTypePolicy.NULLIFY:
                return TransactionResult(fraud=False)

        return TransactionResult(
            type=transaction_type,
            amount=amount,
            description=self.synthesizer.synthesize(transaction_type, entity),
            fraud=False
        )


def to_json(result: TransactionResult) -> str:
    """
    Render the wire format: type, amount, description, fraud in that order

    Missing values are literal nulls, the amount is a JSON number and strings
    are escaped (backslash, quote, control characters).
    """
    return result.model_dump_json()

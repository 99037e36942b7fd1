from typing import Optional

from sms_extractor.schemas.transaction import TransactionType

MIN_WORDS = 10
MAX_WORDS = 15

PADDING_CLAUSE = "processed through your bank account and completed successfully"

ENTITY_TEMPLATES = {
    TransactionType.CREDIT: "Received from {entity}",
    TransactionType.DEBIT: "Transfer to {entity}",
    TransactionType.UNKNOWN: "Transaction with {entity}",
}

GENERIC_SENTENCES = {
    TransactionType.CREDIT: "Money received credit transaction",
    TransactionType.DEBIT: "Payment made debit transaction",
    TransactionType.UNKNOWN: "Bank transaction completed",
}


class DescriptionSynthesizer:
    """Builds a 10 to 15 word description from the type and entity"""

    def __init__(self, padding_clause: str = PADDING_CLAUSE):
        if not padding_clause.split():
            raise ValueError("padding clause must contain at least one word")
        self.padding_clause = padding_clause

    def synthesize(self, transaction_type: Optional[TransactionType], entity: Optional[str]) -> str:
        transaction_type = transaction_type or TransactionType.UNKNOWN

        if entity:
            sentence = ENTITY_TEMPLATES[transaction_type].format(entity=entity)
        else:
            sentence = GENERIC_SENTENCES[transaction_type]

        if transaction_type != TransactionType.UNKNOWN:
            sentence = f"{sentence} {transaction_type.value} type"

        words = sentence.split()
        while len(words) < MIN_WORDS:
            words.extend(self.padding_clause.split())

        return " ".join(words[:MAX_WORDS])

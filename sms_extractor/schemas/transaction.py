from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_serializer, model_validator


class TransactionType(str, Enum):
    CREDIT = "credit"
    DEBIT = "debit"
    UNKNOWN = "unknown"


class TransactionResult(BaseModel):
    """
    Structured facts extracted from one SMS.

    A fraud result carries no type, amount or description.
    """
    type: Optional[TransactionType] = None
    amount: Optional[Decimal] = Field(None, ge=0)
    description: Optional[str] = None
    fraud: bool = False

    @model_validator(mode="after")
    def _check_fraud_override(self):
        if self.fraud and (
            self.type is not None or self.amount is not None or self.description is not None
        ):
            raise ValueError("fraud results must not carry type, amount or description")
        return self

    @field_serializer("amount")
    def _amount_as_number(self, amount: Optional[Decimal]) -> Optional[float]:
        return float(amount) if amount is not None else None


class SMSParseRequest(BaseModel):
    sms_text: str


class PromptParseRequest(BaseModel):
    prompt: str

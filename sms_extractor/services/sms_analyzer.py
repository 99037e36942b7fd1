"""
Caller-facing entry point for SMS analysis.

Adds the checks that belong to the caller rather than the pipeline: text must
be supplied, and the backend loader must have finished initializing.
"""

from typing import Optional

import structlog

from sms_extractor.core.errors import EmptyMessageError, ModelNotReadyError
from sms_extractor.ml.inference.model_loader import BackendLoader
from sms_extractor.schemas.transaction import TransactionResult
from sms_extractor.services.pipeline import TransactionExtractor

logger = structlog.get_logger()

SMS_MARKER = "SMS:"


def extract_sms_from_prompt(prompt: str) -> str:
    """
    Pull the message body out of a prompt such as: Analyze this SMS: "..."

    Takes the text after "SMS:", inside the first pair of double quotes when
    there is one. Prompts without the marker are returned trimmed.
    """
    if SMS_MARKER not in prompt:
        return prompt.strip()

    body = prompt[prompt.index(SMS_MARKER) + len(SMS_MARKER):]
    if '"' in body:
        body = body[body.index('"') + 1:]
        if '"' in body:
            body = body[:body.index('"')]
    return body.strip()


class SMSAnalyzer:
    """
    Analyzes SMS text for a host application.

    Calls made before the backend loader is ready are rejected with
    ModelNotReadyError rather than queued.
    """

    def __init__(self, extractor: TransactionExtractor, backend_loader: Optional[BackendLoader] = None):
        self.extractor = extractor
        self.backend_loader = backend_loader

    def analyze(self, sms_text: Optional[str]) -> TransactionResult:
        if sms_text is None or not sms_text.strip():
            raise EmptyMessageError()

        if self.backend_loader is not None and not self.backend_loader.is_ready:
            raise ModelNotReadyError()

        result = self.extractor.extract(sms_text)
        logger.info(
            "sms_analyzed",
            type=result.type.value if result.type else None,
            has_amount=result.amount is not None,
            fraud=result.fraud
        )
        return result

    def analyze_prompt(self, prompt: str) -> TransactionResult:
        return self.analyze(extract_sms_from_prompt(prompt))

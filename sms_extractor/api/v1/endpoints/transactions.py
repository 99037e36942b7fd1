"""
Transaction Extraction API Endpoints
"""

from fastapi import APIRouter, Depends

from sms_extractor.api.deps import get_analyzer
from sms_extractor.schemas.transaction import (
    PromptParseRequest,
    SMSParseRequest,
    TransactionResult
)
from sms_extractor.services.sms_analyzer import SMSAnalyzer

router = APIRouter()

@router.post("/parse-sms", response_model=TransactionResult)
def parse_sms(
    request: SMSParseRequest,
    analyzer: SMSAnalyzer = Depends(get_analyzer)
):
    """
    Extract type, amount, description and fraud flag from an SMS
    """
    return analyzer.analyze(request.sms_text)

@router.post("/analyze-prompt", response_model=TransactionResult)
def analyze_prompt(
    request: PromptParseRequest,
    analyzer: SMSAnalyzer = Depends(get_analyzer)
):
    """
    Same as parse-sms, for messages wrapped as SMS: "..." inside a prompt
    """
    return analyzer.analyze_prompt(request.prompt)

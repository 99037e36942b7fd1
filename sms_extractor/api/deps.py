"""
FastAPI Dependencies
"""

from fastapi import Request

from sms_extractor.ml.inference.model_loader import BackendLoader
from sms_extractor.services.sms_analyzer import SMSAnalyzer

def get_analyzer(request: Request) -> SMSAnalyzer:
    """SMS analyzer built at startup"""
    return request.app.state.analyzer

def get_backend_loader(request: Request) -> BackendLoader:
    """Backend loader dependency"""
    return request.app.state.backend_loader

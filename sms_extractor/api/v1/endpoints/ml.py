"""
ML Backend API Endpoints
"""

from fastapi import APIRouter, Depends

from sms_extractor.api.deps import get_backend_loader
from sms_extractor.ml.inference.model_loader import BackendLoader
from sms_extractor.schemas.ml import ModelStatusResponse, WarmupResponse

router = APIRouter()

def _backend_name(loader: BackendLoader):
    return loader.backend.name if loader.backend is not None else None

@router.get("/status", response_model=ModelStatusResponse)
def get_model_status(
    loader: BackendLoader = Depends(get_backend_loader)
):
    """
    Report backend readiness so a client can enable its analyze action
    """
    return ModelStatusResponse(
        status=loader.status.name.lower(),
        status_code=int(loader.status),
        ready=loader.is_ready,
        backend=_backend_name(loader)
    )

@router.post("/warmup", response_model=WarmupResponse)
def warmup_model(
    loader: BackendLoader = Depends(get_backend_loader)
):
    """
    Run one dummy inference through the loaded backend
    """
    return WarmupResponse(
        warmed_up=loader.warmup(),
        backend=_backend_name(loader)
    )

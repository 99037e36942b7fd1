from pydantic import BaseModel
from typing import Optional

class ModelStatusResponse(BaseModel):
    status: str
    status_code: int
    ready: bool
    backend: Optional[str] = None

class WarmupResponse(BaseModel):
    warmed_up: bool
    backend: Optional[str] = None

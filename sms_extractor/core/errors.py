"""
Error types for the extraction service.

Classification ambiguity is never an error: it is reported as an "unknown"
type or null fields. These exceptions cover missing input, readiness and
backend failures.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class ExtractionError(Exception):
    """Base error for the extraction service"""

    status_code = 500

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class EmptyMessageError(ExtractionError):
    """No message text was supplied"""

    status_code = 422

    def __init__(self, detail: str = "SMS text is empty"):
        super().__init__(detail)


class ModelNotReadyError(ExtractionError):
    """Analysis requested before the backend finished initializing"""

    status_code = 503

    def __init__(self, detail: str = "Model not ready"):
        super().__init__(detail)


class BackendError(ExtractionError):
    """Failure inside an optional learned-model backend"""


class BackendLoadError(BackendError):
    pass


class BackendInferenceError(BackendError):
    pass


def register_error_handlers(app: FastAPI) -> None:
    """Map extraction errors to JSON responses carrying their status code."""

    @app.exception_handler(ExtractionError)
    async def extraction_error_handler(request: Request, exc: ExtractionError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

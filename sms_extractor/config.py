from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    # API Settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "SMS Transaction Extractor"
    VERSION: str = "1.0.0"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ML Backend
    MODEL_BACKEND: str = "none"  # none, sklearn, xgboost
    MODEL_PATH: Optional[str] = None
    FEATURE_DIM: int = 128
    INFERENCE_TIMEOUT_SECONDS: float = 2.0
    INFERENCE_WORKERS: int = 2

    # Fallback policy
    TYPE_CONFIDENCE_THRESHOLD: float = 0.5
    FRAUD_CONFIDENCE_THRESHOLD: float = 0.5
    UNKNOWN_TYPE_POLICY: str = "nullify"  # nullify, surface, fraud
    AMOUNT_BARE_NUMBER_FALLBACK: bool = True

    # Vocabulary and NER
    VOCABULARY_PATH: Optional[str] = None
    ENABLE_NER_FALLBACK: bool = False
    SPACY_MODEL: str = "en_core_web_sm"

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # App
    APP_NAME: str = "ExpenseScan"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # CORS
    ALLOWED_ORIGINS: List[str] = ["*"]

    # Document AI (Expense Parser processor)
    GOOGLE_CLOUD_PROJECT: str = "your-project-id"
    DOCUMENT_AI_LOCATION: str = "us"
    PROCESSOR_ID: str = "f13785bc24b54649"
    DOCUMENT_AI_TIMEOUT: float = 60.0

    # Serve a canned receipt instead of calling Document AI (local dev)
    DEMO_MODE: bool = False

    # Uploads
    DEFAULT_MIME_TYPE: str = "image/jpeg"
    MAX_IMAGE_MB: int = 10

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()

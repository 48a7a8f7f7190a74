import os
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    """Runtime settings for the consultation copilot."""

    # Suggestion engine
    MAX_SUGGESTIONS: int = int(os.getenv("MAX_SUGGESTIONS", "5"))

    # Simulated pacing before a pass completes (the prototype used 1.0s / 1.5s)
    ANALYSIS_DELAY_SECONDS: float = float(os.getenv("ANALYSIS_DELAY_SECONDS", "0"))
    SUMMARY_DELAY_SECONDS: float = float(os.getenv("SUMMARY_DELAY_SECONDS", "0"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS: str = os.getenv(
        "CORS_ORIGINS", "http://127.0.0.1:5173,http://localhost:5173"
    )

    class Config:
        case_sensitive = True

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()

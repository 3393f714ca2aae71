# backend configuration
# loads env vars for mongodb, jwt, and the mood aggregation defaults

import os
from pathlib import Path
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# load .env from project root
load_dotenv(Path(__file__).parent.parent.parent / ".env")


class Settings(BaseSettings):
    # mongodb
    MONGODB_URI: str = os.getenv("MONGODB_URI", "")
    MONGODB_DATABASE: str = os.getenv("MONGODB_DATABASE", "emoti_db")

    # jwt auth
    JWT_SECRET: str = os.getenv("JWT_SECRET", "emoti-dev-secret-change-in-production")
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # cors
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:5173")

    # mood event log
    MOOD_LOG_LIMIT: int = 500
    MOOD_TIMEZONE: str = os.getenv("MOOD_TIMEZONE", "UTC")

    # optional json file extending the emotion -> score / label table
    EMOTION_TABLE_PATH: str = os.getenv("EMOTION_TABLE_PATH", "")

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./evenup.db"
    SQL_ECHO: bool = False
    LOG_LEVEL: str = "INFO"
    # most recent expenses / payments read per balance request
    HISTORY_LIMIT: int = 50

    class Config:
        env_file = ".env"

settings = Settings()

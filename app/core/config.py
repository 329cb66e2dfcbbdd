from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    APP_NAME: str = "Pro League API"
    API_PREFIX: str = "/api"
    DATABASE_URL: str = "sqlite:///./pro_league.db"

    SECRET_KEY: str = "YOUR_SECRET_KEY_HERE"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    BCRYPT_ROUNDS: int = 12

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    database_url: str = "sqlite:///./taskportal.db"
    jwt_secret: str = "devsecret"
    jwt_alg: str = "HS256"
    cors_origins: str = "http://localhost:3000"

    session_cookie_name: str = "session"
    session_ttl_hours: int = 24
    environment: str = "development"

    timezone: str = "UTC"
    log_level: str = "INFO"

    class Config:
        env_prefix = ""
        case_sensitive = False
        env_file = ".env"

settings = Settings()

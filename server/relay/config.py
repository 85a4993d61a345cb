from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    HOST: str = "0.0.0.0"
    PORT: int = 3000
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Shared by the HTTP CORS middleware and the Socket.IO server
    CORS_ORIGINS: list[str] = ["*"]
    SOCKETIO_PATH: str = "socket.io"

    # Web client; only mounted when the directory exists
    STATIC_DIR: str = "public"


settings = Settings()

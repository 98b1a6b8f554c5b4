from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Embedded MongoDB configuration"""

    # Image
    image_name: str = "mongo"
    image_tag: str = "4.0.10"

    # MongoDB
    internal_port: int = 27017
    replica_set_name: str = "docker-rs"
    mongo_shell: str = "mongo"
    default_database_name: str = "test"
    host: str = "localhost"

    # Credentials
    auth_enabled: bool = False
    root_username: str = "root"
    root_password: str = "password"

    # Replica set bootstrap
    initiate_retries: int = 60
    await_primary_attempts: int = 60
    retry_interval_ms: int = 100

    # Docker
    container_prefix: str = "embedded-mongo"
    startup_log_pattern: str = "(?i).*waiting for connections.*"
    startup_timeout_seconds: int = 60
    startup_poll_interval_seconds: float = 0.5

    @property
    def image(self) -> str:
        return f"{self.image_name}:{self.image_tag}"

    @property
    def retry_interval_seconds(self) -> float:
        return self.retry_interval_ms / 1000

    class Config:
        env_prefix = "EMBEDDED_MONGO_"
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()

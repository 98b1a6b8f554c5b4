from pydantic import BaseModel, Field

from embedded_mongo.config import settings


class Credentials(BaseModel):
    """Root credentials of a node, fixed before the node is started"""
    auth_enabled: bool = Field(default=False, description="Whether authentication is enabled")
    username: str = Field(
        default=settings.root_username,
        description="Root username",
        min_length=1
    )
    password: str = Field(
        default=settings.root_password,
        description="Password of the root user",
        min_length=1
    )

    class Config:
        frozen = True

    @classmethod
    def disabled(cls) -> "Credentials":
        """Credentials for a node running without authentication"""
        return cls(auth_enabled=False)

    @classmethod
    def root(cls, username: str, password: str) -> "Credentials":
        """Custom root credentials; enables authentication"""
        if username is None:
            raise ValueError("The username must not be null")
        if password is None:
            raise ValueError("The password must not be null")
        return cls(auth_enabled=True, username=username, password=password)

    @classmethod
    def from_settings(cls, config=None) -> "Credentials":
        """Build credentials from the ``root_*``/``auth_enabled`` settings"""
        config = config or settings
        return cls(
            auth_enabled=config.auth_enabled,
            username=config.root_username,
            password=config.root_password
        )

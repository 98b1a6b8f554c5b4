from pydantic import BaseModel, Field


class Endpoint(BaseModel):
    """Host address and mapped port of a running node"""
    host: str = Field(..., description="Host address reachable from the test process")
    port: int = Field(..., description="Mapped external port", ge=1, le=65535)

    class Config:
        frozen = True

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"


class ExecResult(BaseModel):
    """Outcome of one command executed inside a node"""
    exit_code: int = Field(..., description="Exit code of the command")
    stdout: str = Field(default="", description="Captured standard output")

    class Config:
        frozen = True

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

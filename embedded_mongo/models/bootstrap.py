from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

from embedded_mongo.errors import ReplicaSetInitializationError
from embedded_mongo.models.node import ExecResult


class BootstrapState(str, Enum):
    """States of a single bootstrap call"""
    NOT_STARTED = "not_started"
    INITIATING = "initiating"
    CONFIRMING = "confirming"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (BootstrapState.SUCCEEDED, BootstrapState.FAILED)


class BootstrapSuccess(BaseModel):
    """The node was confirmed primary of a single node replica set"""
    succeeded: Literal[True] = True
    initiate_attempts: int = Field(..., description="Executions of rs.initiate()", ge=1)
    initiate_output: str = Field(default="", description="Output of the last rs.initiate()")
    confirm_output: str = Field(default="", description="Output of the wait-for-primary script")

    class Config:
        frozen = True

    def raise_for_failure(self) -> "BootstrapSuccess":
        return self


class BootstrapFailure(BaseModel):
    """The replica set could not be initialized"""
    succeeded: Literal[False] = False
    phase: Literal["initiate", "confirm"] = Field(..., description="Phase that failed")
    message: str = Field(..., description="Human-readable diagnostic")
    last_result: Optional[ExecResult] = Field(None, description="Last command result")

    class Config:
        frozen = True

    @property
    def error(self) -> ReplicaSetInitializationError:
        return ReplicaSetInitializationError(self.message, phase=self.phase)

    def raise_for_failure(self):
        raise self.error


BootstrapOutcome = Union[BootstrapSuccess, BootstrapFailure]

from embedded_mongo.models.bootstrap import (
    BootstrapFailure,
    BootstrapOutcome,
    BootstrapState,
    BootstrapSuccess,
)
from embedded_mongo.models.credentials import Credentials
from embedded_mongo.models.node import Endpoint, ExecResult

__all__ = [
    "BootstrapFailure",
    "BootstrapOutcome",
    "BootstrapState",
    "BootstrapSuccess",
    "Credentials",
    "Endpoint",
    "ExecResult",
]

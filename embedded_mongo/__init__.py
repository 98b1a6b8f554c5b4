"""
Disposable MongoDB containers for tests, initialized as single node replica sets
"""
from embedded_mongo.container import MongoDBContainer
from embedded_mongo.errors import (
    ContainerStartupError,
    EmbeddedMongoError,
    InvalidNodeStateError,
    ReplicaSetInitializationError,
)
from embedded_mongo.models import BootstrapOutcome, BootstrapState, Credentials, ExecResult
from embedded_mongo.services.bootstrapper import ReplicaSetBootstrapper
from embedded_mongo.services.connection import build_replica_set_url

__version__ = "1.0.0"

__all__ = [
    "BootstrapOutcome",
    "BootstrapState",
    "ContainerStartupError",
    "Credentials",
    "EmbeddedMongoError",
    "ExecResult",
    "InvalidNodeStateError",
    "MongoDBContainer",
    "ReplicaSetBootstrapper",
    "ReplicaSetInitializationError",
    "build_replica_set_url",
]

from typing import Optional


class EmbeddedMongoError(Exception):
    """Base class for errors raised by embedded_mongo"""


class ReplicaSetInitializationError(EmbeddedMongoError):
    """
    A single node replica set could not be initialized.

    Raised both when ``rs.initiate()`` never exits cleanly and when the node
    never reports itself as primary. ``phase`` tells the two apart
    ("initiate" or "confirm") for callers that need more than the message.
    """

    def __init__(self, message: str, phase: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.phase = phase


class InvalidNodeStateError(EmbeddedMongoError, RuntimeError):
    """The node is not in a state that allows the requested operation"""


class ContainerStartupError(EmbeddedMongoError):
    """The container did not report readiness before the startup timeout"""

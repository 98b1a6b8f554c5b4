from typing import Optional
from urllib.parse import quote_plus

from embedded_mongo.config import settings
from embedded_mongo.errors import InvalidNodeStateError
from embedded_mongo.models.credentials import Credentials
from embedded_mongo.services.node_handle import NodeHandle

MONGODB_SCHEME = "mongodb"


def build_replica_set_url(
    node: NodeHandle,
    credentials: Credentials,
    database_name: Optional[str] = None,
    scheme: str = MONGODB_SCHEME
) -> str:
    """
    Get a replica set url for a running node

    Args:
        node: Node to connect to
        credentials: Credentials the node was started with
        database_name: Database name, defaults to the configured one ("test")
        scheme: URL scheme

    Returns:
        str: ``scheme://[user:password@]host:port/database``

    Raises:
        InvalidNodeStateError: if the node is not running
    """
    if not node.is_running():
        raise InvalidNodeStateError("MongoDBContainer should be started first")

    database_name = database_name or settings.default_database_name
    endpoint = node.mapped_endpoint()

    if credentials.auth_enabled:
        return (
            f"{scheme}://{quote_plus(credentials.username)}:{quote_plus(credentials.password)}"
            f"@{endpoint.host}:{endpoint.port}/{database_name}"
        )
    return f"{scheme}://{endpoint.host}:{endpoint.port}/{database_name}"

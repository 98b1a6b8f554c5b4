"""
pytest fixtures providing a MongoDB single node replica set

Enabled automatically once embedded-mongo is installed. Configure it with
``EMBEDDED_MONGO_*`` environment variables, for example::

    EMBEDDED_MONGO_IMAGE_TAG=5.0 EMBEDDED_MONGO_AUTH_ENABLED=true pytest
"""
import logging
from typing import Generator, Optional

import pytest

from embedded_mongo.config import Settings
from embedded_mongo.container import MongoDBContainer

logger = logging.getLogger(__name__)


def running_container(settings: Optional[Settings] = None) -> Generator[MongoDBContainer, None, None]:
    """Start a container, hand it out, and remove it once the consumer is done"""
    with MongoDBContainer(settings=settings) as container:
        logger.info(f"Session MongoDB available at {container.get_replica_set_url()}")
        yield container


@pytest.fixture(scope="session")
def mongodb_container() -> Generator[MongoDBContainer, None, None]:
    """MongoDB container started once per test session"""
    yield from running_container()


@pytest.fixture(scope="session")
def mongodb_replica_set_url(mongodb_container: MongoDBContainer) -> str:
    """Replica set url of the session container for the default database"""
    return mongodb_container.get_replica_set_url()

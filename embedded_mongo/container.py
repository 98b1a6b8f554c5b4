import logging
from typing import Optional

from pymongo import MongoClient

from embedded_mongo.config import Settings, settings as default_settings
from embedded_mongo.errors import InvalidNodeStateError
from embedded_mongo.models.credentials import Credentials
from embedded_mongo.services.bootstrapper import ReplicaSetBootstrapper
from embedded_mongo.services.connection import build_replica_set_url
from embedded_mongo.services.docker_manager import DockerManager
from embedded_mongo.services.node_handle import DockerNodeHandle

logger = logging.getLogger(__name__)


class MongoDBContainer:
    """
    Disposable MongoDB node running as a single node replica set

    Usage::

        with MongoDBContainer(credentials=Credentials.root("root", "secret")) as mongo:
            client = mongo.get_client()

    ``start()`` returns only once the node is primary, so transactions and
    change streams work right away.
    """

    def __init__(
        self,
        image: Optional[str] = None,
        credentials: Optional[Credentials] = None,
        settings: Optional[Settings] = None,
        docker_manager: Optional[DockerManager] = None,
        bootstrapper: Optional[ReplicaSetBootstrapper] = None
    ):
        self.settings = settings or default_settings
        self.image = image or self.settings.image
        self.credentials = credentials or Credentials.from_settings(self.settings)
        self._docker_manager = docker_manager
        self.bootstrapper = bootstrapper or ReplicaSetBootstrapper(self.settings)
        self.node_id: Optional[str] = None
        self.node: Optional[DockerNodeHandle] = None

    @property
    def docker_manager(self) -> DockerManager:
        if self._docker_manager is None:
            self._docker_manager = DockerManager(settings=self.settings)
        return self._docker_manager

    @property
    def root_username(self) -> str:
        return self.credentials.username

    @property
    def root_password(self) -> str:
        return self.credentials.password

    def start(self) -> "MongoDBContainer":
        """
        Start the container, wait for it to accept connections and initialize
        the replica set

        Raises:
            ContainerStartupError: if mongod never reports it is waiting for connections
            ReplicaSetInitializationError: if the replica set could not be initialized
        """
        if self.node is not None:
            logger.warning(f"Container {self.node.name} is already started")
            return self

        self.node_id = self.docker_manager.new_node_id()
        container = self.docker_manager.create_node(self.node_id, self.credentials, image=self.image)
        self.node = DockerNodeHandle(
            container,
            internal_port=self.settings.internal_port,
            host=self.settings.host
        )

        try:
            self.docker_manager.wait_for_log(container)
            self.bootstrapper.bootstrap(self.node, self.credentials).raise_for_failure()
        except Exception:
            logs = self.docker_manager.get_container_logs(self.node_id, tail=50)
            logger.error(f"MongoDB container failed to start, last log lines:\n{logs}")
            self.stop()
            raise

        logger.info(f"MongoDB replica set ready at {self.node.mapped_endpoint()}")
        return self

    def stop(self):
        """Remove the container; safe to call more than once"""
        if self.node_id is None:
            return
        self.docker_manager.remove_node(self.node_id, force=True)
        self.node_id = None
        self.node = None

    def is_running(self) -> bool:
        return self.node is not None and self.node.is_running()

    def get_replica_set_url(self, database_name: Optional[str] = None) -> str:
        """
        Gets a replica set url for ``database_name``, the configured default database otherwise

        Raises:
            InvalidNodeStateError: if the container is not started
        """
        if self.node is None:
            raise InvalidNodeStateError("MongoDBContainer should be started first")
        return build_replica_set_url(
            self.node,
            self.credentials,
            database_name or self.settings.default_database_name
        )

    def get_client(self, database_name: Optional[str] = None, **kwargs) -> MongoClient:
        """
        MongoClient connected to the node

        The replica set member is registered under the container hostname,
        which is not resolvable from the host, hence ``directConnection``.
        """
        kwargs.setdefault("directConnection", True)
        kwargs.setdefault("serverSelectionTimeoutMS", 5000)
        return MongoClient(self.get_replica_set_url(database_name), **kwargs)

    def __enter__(self) -> "MongoDBContainer":
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()

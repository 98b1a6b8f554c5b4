import logging
import re
import time
import uuid
from typing import Dict, Optional

import docker
from docker.models.containers import Container

from embedded_mongo.config import Settings, settings as default_settings
from embedded_mongo.errors import ContainerStartupError
from embedded_mongo.models.credentials import Credentials

logger = logging.getLogger(__name__)


class DockerManager:
    """Manages Docker containers for embedded MongoDB nodes"""

    def __init__(self, client: Optional[docker.DockerClient] = None, settings: Optional[Settings] = None):
        """Initialize Docker client"""
        self.settings = settings or default_settings
        try:
            self.client = client or docker.from_env()
            self.client.ping()
            logger.info("Docker client initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize Docker client: {e}")
            raise

        self.containers: Dict[str, Container] = {}

    def _get_container_name(self, node_id: str) -> str:
        """Generate container name from node ID"""
        return f"{self.settings.container_prefix}-{node_id}"

    @staticmethod
    def new_node_id() -> str:
        return uuid.uuid4().hex[:12]

    def _get_container(self, node_id: str) -> Container:
        if node_id not in self.containers:
            self.containers[node_id] = self.client.containers.get(self._get_container_name(node_id))
        return self.containers[node_id]

    def create_node(
        self,
        node_id: str,
        credentials: Credentials,
        image: Optional[str] = None
    ) -> Container:
        """
        Create and start a MongoDB container running as a replica set member

        Args:
            node_id: Unique identifier for the node
            credentials: Root credentials, injected only when auth is enabled
            image: Image to run, defaults to the configured image

        Returns:
            Container: The created Docker container
        """
        container_name = self._get_container_name(node_id)

        if node_id in self.containers:
            logger.warning(f"Container {container_name} already exists")
            return self.containers[node_id]

        environment = {}
        if credentials.auth_enabled:
            environment["MONGO_INITDB_ROOT_USERNAME"] = credentials.username
            environment["MONGO_INITDB_ROOT_PASSWORD"] = credentials.password

        try:
            container = self.client.containers.run(
                image=image or self.settings.image,
                name=container_name,
                command=["--replSet", self.settings.replica_set_name],
                # None lets Docker pick a free host port
                ports={f"{self.settings.internal_port}/tcp": None},
                environment=environment,
                detach=True,
                remove=False
            )

            self.containers[node_id] = container
            logger.info(f"Created container {container_name}")

            return container

        except Exception as e:
            logger.error(f"Failed to create container {container_name}: {e}")
            raise

    def wait_for_log(
        self,
        container: Container,
        pattern: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        """
        Block until a container log line matches ``pattern``

        Raises:
            ContainerStartupError: if the container stops or the timeout expires
        """
        pattern = pattern or self.settings.startup_log_pattern
        timeout = timeout if timeout is not None else self.settings.startup_timeout_seconds
        regex = re.compile(pattern)

        start = time.time()
        while time.time() - start < timeout:
            logs = container.logs().decode("utf-8", errors="replace")
            if any(regex.match(line) for line in logs.splitlines()):
                logger.debug(f"Container {container.name} is up")
                return

            container.reload()
            if container.status in ("exited", "dead"):
                message = f"Container {container.name} exited before it was ready:\n{logs}"
                logger.error(message)
                raise ContainerStartupError(message)

            time.sleep(self.settings.startup_poll_interval_seconds)

        message = f"Timeout waiting for '{pattern}' in logs of {container.name} after {timeout}s"
        logger.error(message)
        raise ContainerStartupError(message)

    def remove_node(self, node_id: str, force: bool = True) -> bool:
        """
        Remove a MongoDB container

        Args:
            node_id: Node identifier
            force: Force remove even if running

        Returns:
            bool: True if successful
        """
        container_name = self._get_container_name(node_id)

        try:
            container = self._get_container(node_id)
        except docker.errors.NotFound:
            logger.warning(f"Container {container_name} not found")
            self.containers.pop(node_id, None)
            return False

        try:
            container.remove(force=force)
            logger.info(f"Removed container {container_name}")
            del self.containers[node_id]
            return True

        except Exception as e:
            logger.error(f"Failed to remove container {container_name}: {e}")
            return False

    def get_container_logs(self, node_id: str, tail: int = 100) -> str:
        """Get logs from a container"""
        container_name = self._get_container_name(node_id)
        try:
            container = self._get_container(node_id)
            # logs returns bytes, decode to string
            return container.logs(tail=tail).decode('utf-8')
        except Exception as e:
            logger.error(f"Failed to get logs for {container_name}: {e}")
            return f"Error retrieving logs: {str(e)}"

    def cleanup_all(self):
        """Remove every container carrying the configured prefix"""
        logger.info(f"Cleaning up all {self.settings.container_prefix} containers")

        try:
            containers = self.client.containers.list(
                all=True,
                filters={"name": self.settings.container_prefix}
            )
            for container in containers:
                try:
                    container.remove(force=True)
                    logger.info(f"Removed container {container.name}")
                except Exception as e:
                    logger.error(f"Failed to remove container {container.name}: {e}")
        except Exception as e:
            logger.error(f"Failed to list containers: {e}")

        self.containers.clear()

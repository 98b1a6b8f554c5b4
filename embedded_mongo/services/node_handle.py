import logging
from typing import Optional, Protocol, Sequence, runtime_checkable

import docker
from docker.models.containers import Container

from embedded_mongo.config import settings
from embedded_mongo.errors import InvalidNodeStateError
from embedded_mongo.models.node import Endpoint, ExecResult

logger = logging.getLogger(__name__)


@runtime_checkable
class NodeHandle(Protocol):
    """A running MongoDB process that commands can be executed in"""

    def is_running(self) -> bool:
        ...

    def execute(self, argv: Sequence[str]) -> ExecResult:
        ...

    def mapped_endpoint(self) -> Endpoint:
        ...


class DockerNodeHandle:
    """NodeHandle backed by a Docker container"""

    def __init__(
        self,
        container: Container,
        internal_port: Optional[int] = None,
        host: Optional[str] = None
    ):
        self.container = container
        self.internal_port = internal_port or settings.internal_port
        self.host = host or settings.host

    @property
    def name(self) -> str:
        return self.container.name

    def is_running(self) -> bool:
        """Refresh the container state from Docker and check it is running"""
        try:
            self.container.reload()
        except docker.errors.NotFound:
            logger.debug(f"Container {self.name} no longer exists")
            return False
        return self.container.status == "running"

    def execute(self, argv: Sequence[str]) -> ExecResult:
        """Run a command inside the container and wait for it to finish"""
        exit_code, output = self.container.exec_run(list(argv))
        stdout = output.decode("utf-8", errors="replace") if output else ""
        logger.debug(f"[{self.name}] {argv[0]} exited with {exit_code}")
        return ExecResult(exit_code=exit_code, stdout=stdout)

    def mapped_endpoint(self) -> Endpoint:
        """Host and host-side port mapped to the internal MongoDB port"""
        self.container.reload()
        ports = self.container.attrs.get("NetworkSettings", {}).get("Ports") or {}
        bindings = ports.get(f"{self.internal_port}/tcp")
        if not bindings:
            raise InvalidNodeStateError(
                f"Port {self.internal_port} of container {self.name} is not mapped"
            )
        return Endpoint(host=self.host, port=int(bindings[0]["HostPort"]))

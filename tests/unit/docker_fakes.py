"""
In-memory stand-ins for docker SDK client and container objects
"""
from typing import Dict, List, Optional

import docker


class FakeContainer:
    def __init__(
        self,
        name: str = "embedded-mongo-test-1",
        logs: str = "",
        statuses: Optional[List[str]] = None,
        host_port: Optional[str] = "32768",
        exec_results: Optional[List[tuple]] = None
    ):
        self.name = name
        self._logs = logs
        self._statuses = list(statuses or ["running"])
        self.status = self._statuses[0]
        self.attrs = {"NetworkSettings": {"Ports": {}}}
        if host_port is not None:
            self.attrs["NetworkSettings"]["Ports"]["27017/tcp"] = [
                {"HostIp": "0.0.0.0", "HostPort": host_port}
            ]
        self.exec_results = list(exec_results or [(0, b"")])
        self.executed: List[List[str]] = []
        self.removed = False
        self.reloads = 0
        self.gone = False

    def reload(self):
        self.reloads += 1
        if self.gone:
            raise docker.errors.NotFound(f"No such container: {self.name}")
        if len(self._statuses) > 1:
            self._statuses.pop(0)
        self.status = self._statuses[0]

    def logs(self, tail=None) -> bytes:
        return self._logs.encode()

    def exec_run(self, cmd):
        self.executed.append(cmd)
        if len(self.exec_results) > 1:
            return self.exec_results.pop(0)
        return self.exec_results[0]

    def remove(self, force=False):
        self.removed = True


class FakeContainers:
    def __init__(self, container: FakeContainer):
        self.container = container
        self.run_kwargs: Dict = {}

    def run(self, **kwargs):
        self.run_kwargs = kwargs
        self.container.name = kwargs["name"]
        return self.container

    def get(self, name):
        if self.container.name != name or self.container.removed:
            raise docker.errors.NotFound(f"No such container: {name}")
        return self.container

    def list(self, all=False, filters=None):
        return [self.container] if not self.container.removed else []


class FakeDockerClient:
    def __init__(self, container: Optional[FakeContainer] = None):
        self.containers = FakeContainers(container or FakeContainer())
        self.pinged = False

    def ping(self):
        self.pinged = True
        return True

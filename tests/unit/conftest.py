"""
Fakes for unit tests: no Docker daemon and no MongoDB are needed
"""
from typing import List, Sequence

import pytest

from embedded_mongo.config import Settings
from embedded_mongo.models import Credentials, Endpoint, ExecResult


class FakeNode:
    """NodeHandle replaying scripted results for rs.initiate() and the wait script"""

    def __init__(
        self,
        initiate_results: Sequence[ExecResult] = (),
        wait_result: ExecResult = ExecResult(exit_code=0, stdout=""),
        running: bool = True,
        endpoint: Endpoint = Endpoint(host="h", port=27017)
    ):
        self.initiate_results = list(initiate_results)
        self.wait_result = wait_result
        self.running = running
        self.endpoint = endpoint
        self.commands: List[List[str]] = []

    @classmethod
    def failing_initiate(cls, failures: int, **kwargs) -> "FakeNode":
        """rs.initiate() fails ``failures`` times then succeeds"""
        results = [
            ExecResult(exit_code=1, stdout=f"connection refused #{i}") for i in range(failures)
        ]
        results.append(ExecResult(exit_code=0, stdout='{ "ok" : 1 }'))
        return cls(initiate_results=results, **kwargs)

    def _is_initiate(self, argv: Sequence[str]) -> bool:
        return argv[-1] == "rs.initiate();"

    @property
    def initiate_calls(self) -> int:
        return sum(1 for argv in self.commands if self._is_initiate(argv))

    @property
    def wait_calls(self) -> int:
        return len(self.commands) - self.initiate_calls

    def is_running(self) -> bool:
        return self.running

    def execute(self, argv: Sequence[str]) -> ExecResult:
        self.commands.append(list(argv))
        if self._is_initiate(argv):
            if len(self.initiate_results) > 1:
                return self.initiate_results.pop(0)
            return self.initiate_results[0]
        return self.wait_result

    def mapped_endpoint(self) -> Endpoint:
        return self.endpoint


class RecordingSleep:
    """Sleep replacement recording requested durations"""

    def __init__(self):
        self.calls: List[float] = []

    def __call__(self, seconds: float):
        self.calls.append(seconds)

    @property
    def total(self) -> float:
        return sum(self.calls)


@pytest.fixture
def test_settings() -> Settings:
    """Settings with the default bootstrap bounds, independent of the environment"""
    return Settings(
        image_name="mongo",
        image_tag="4.0.10",
        mongo_shell="mongo",
        host="localhost",
        auth_enabled=False,
        root_username="root",
        root_password="password",
        initiate_retries=60,
        await_primary_attempts=60,
        retry_interval_ms=100,
        container_prefix="embedded-mongo-test",
        startup_timeout_seconds=1,
        startup_poll_interval_seconds=0
    )


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def no_auth() -> Credentials:
    return Credentials.disabled()


@pytest.fixture
def root_auth() -> Credentials:
    return Credentials.root("root", "pw")

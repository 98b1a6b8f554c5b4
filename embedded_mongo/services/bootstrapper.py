import logging
import time
from typing import Callable, Optional

from embedded_mongo.config import Settings, settings as default_settings
from embedded_mongo.models.bootstrap import (
    BootstrapFailure,
    BootstrapOutcome,
    BootstrapState,
    BootstrapSuccess,
)
from embedded_mongo.models.credentials import Credentials
from embedded_mongo.models.node import ExecResult
from embedded_mongo.services.commands import (
    build_initiate_command,
    build_wait_for_primary_command,
)
from embedded_mongo.services.node_handle import NodeHandle
from embedded_mongo.services.retry import retry

logger = logging.getLogger(__name__)

# Printed by rs.initiate() on a node that already belongs to a replica set
ALREADY_INITIALIZED_MARKERS = ("already initialized", "AlreadyInitialized")


class ReplicaSetBootstrapper:
    """Turns a freshly started MongoDB node into a single node replica set"""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Initialize the bootstrapper

        Args:
            settings: Attempt ceilings, retry interval and shell to use
            sleep: Sleep function used between initiate attempts
        """
        self.settings = settings or default_settings
        self.sleep = sleep
        self.state = BootstrapState.NOT_STARTED

    def _transition(self, state: BootstrapState):
        logger.debug(f"Replica set bootstrap: {self.state.value} -> {state.value}")
        self.state = state

    def _fail(self, phase: str, message: str, last_result: Optional[ExecResult]) -> BootstrapFailure:
        logger.error(message)
        self._transition(BootstrapState.FAILED)
        return BootstrapFailure(phase=phase, message=message, last_result=last_result)

    @staticmethod
    def is_initiated(result: ExecResult) -> bool:
        """rs.initiate() succeeded, or the node already belongs to a replica set"""
        if result.ok:
            return True
        return any(marker in result.stdout for marker in ALREADY_INITIALIZED_MARKERS)

    def _execute(self, node: NodeHandle, argv) -> ExecResult:
        result = node.execute(argv)
        logger.debug(result.stdout)
        return result

    def bootstrap(self, node: NodeHandle, credentials: Credentials) -> BootstrapOutcome:
        """
        Initiate a single node replica set and wait until the node is primary

        The node must already be running and accepting connections. It is
        borrowed: it is neither stopped nor closed here. A command that cannot
        be executed at all (e.g. the container was removed meanwhile) ends the
        call with a failure of the current phase.

        Args:
            node: Running node
            credentials: Credentials the node was started with

        Returns:
            BootstrapOutcome: BootstrapSuccess, or BootstrapFailure carrying the
            diagnostic message of the failed phase
        """
        self.state = BootstrapState.NOT_STARTED
        shell = self.settings.mongo_shell
        interval_ms = self.settings.retry_interval_ms

        logger.debug("Initializing a single node replica set...")
        self._transition(BootstrapState.INITIATING)

        initiate_command = build_initiate_command(credentials, shell)
        try:
            initiated = retry(
                max_attempts=self.settings.initiate_retries + 1,
                interval=self.settings.retry_interval_seconds,
                operation=lambda: self._execute(node, initiate_command),
                accept=self.is_initiated,
                sleep=self.sleep,
                on_retry=lambda attempt, result: logger.debug(
                    f"rs.initiate() attempt {attempt} exited with {result.exit_code}"
                )
            )
        except Exception as e:
            return self._fail("initiate", f"An error occurred: {e}", None)

        initiate_result = initiated.value
        if initiated.exhausted:
            return self._fail(
                "initiate",
                f"An error occurred: {initiate_result.stdout}",
                initiate_result
            )

        max_attempts = self.settings.await_primary_attempts
        logger.debug(
            f"Awaiting for a single node replica set initialization up to {max_attempts} attempts"
        )
        self._transition(BootstrapState.CONFIRMING)

        try:
            wait_result = self._execute(
                node,
                build_wait_for_primary_command(credentials, max_attempts, interval_ms, shell)
            )
        except Exception as e:
            return self._fail("confirm", f"An error occurred: {e}", None)

        if not wait_result.ok:
            return self._fail(
                "confirm",
                f"A single node replica set was not initialized in a set timeout: {max_attempts} attempts",
                wait_result
            )

        self._transition(BootstrapState.SUCCEEDED)
        logger.info(f"Single node replica set initialized after {initiated.attempts} attempt(s)")
        return BootstrapSuccess(
            initiate_attempts=initiated.attempts,
            initiate_output=initiate_result.stdout,
            confirm_output=wait_result.stdout
        )

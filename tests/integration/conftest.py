"""
Pytest configuration for integration tests
"""
import logging
import time

import docker
import pytest

from embedded_mongo.config import Settings
from embedded_mongo.services.docker_manager import DockerManager

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

TEST_CONTAINER_PREFIX = "embedded-mongo-it"
# last image line shipping both the legacy mongo shell and a server current drivers support
TEST_IMAGE_TAG = "5.0"


@pytest.fixture(scope="session")
def docker_client():
    """Get Docker client, skipping the session when no daemon is reachable."""
    try:
        client = docker.from_env()
        client.ping()
    except docker.errors.DockerException as e:
        pytest.skip(f"Docker is not available: {e}")
    yield client
    client.close()


@pytest.fixture(scope="session")
def it_settings() -> Settings:
    return Settings(container_prefix=TEST_CONTAINER_PREFIX, image_tag=TEST_IMAGE_TAG, mongo_shell="mongo")


def cleanup_test_containers(docker_client: docker.DockerClient, settings: Settings):
    """Remove all test containers."""
    logger.info("Cleaning up test containers...")
    DockerManager(client=docker_client, settings=settings).cleanup_all()


@pytest.fixture(scope="session", autouse=True)
def setup_and_teardown(docker_client, it_settings):
    """Setup before all tests and cleanup after all tests."""
    cleanup_test_containers(docker_client, it_settings)

    yield

    logger.info("Test session complete. Cleaning up...")
    cleanup_test_containers(docker_client, it_settings)


def wait_for_condition(condition_fn, timeout=60, interval=2, description="condition"):
    """Wait for a condition to be true."""
    start = time.time()
    while time.time() - start < timeout:
        try:
            if condition_fn():
                return True
        except Exception as e:
            logger.debug(f"Waiting for {description}: {e}")
        time.sleep(interval)
    raise TimeoutError(f"Timeout waiting for {description} after {timeout}s")

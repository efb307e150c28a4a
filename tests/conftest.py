"""Shared pytest fixtures for all tests."""

import pytest
from fastapi.testclient import TestClient

from cli.config import Config
from hub import service_locator
from hub.main import app
from hub.repositories.message_repository import MessageRepository
from hub.services.file_service import FileService
from hub.services.message_service import MessageRelay


class FailingSystemInfoService:
    """Stand-in for SystemInfoService whose lookups always fail."""

    def get_system_info(self):
        raise RuntimeError("system info not configured for this test")


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to temporary .pihub directory
    """
    config_dir = tmp_path / '.pihub'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir):
    """
    Create temporary config instance.

    Args:
        temp_config_dir: Temporary config directory fixture

    Returns:
        Config instance with temp config file
    """
    return Config(temp_config_dir / 'config.json')


@pytest.fixture
def sample_file(tmp_path):
    """
    Create a sample file for testing file uploads.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to sample text file
    """
    file_path = tmp_path / 'test.txt'
    file_path.write_text('Sample content for testing')
    return file_path


@pytest.fixture
def uploads_dir(tmp_path):
    """Empty upload directory for the hub under test."""
    path = tmp_path / 'uploads'
    path.mkdir()
    return path


@pytest.fixture
def messages_file(tmp_path):
    """Location of the persisted chat history for the hub under test."""
    return tmp_path / 'messages.json'


@pytest.fixture
def hub_services(uploads_dir, messages_file, tmp_path, monkeypatch):
    """
    Point the hub's services at temporary storage.

    Yields:
        Dict with the installed file_service and message_relay
    """
    monkeypatch.setattr("hub.config.DIST_DIR", tmp_path / 'dist')

    file_service = FileService(uploads_dir)
    message_relay = MessageRelay(MessageRepository(messages_file))

    service_locator.set_file_service(file_service)
    service_locator.set_message_relay(message_relay)
    service_locator.set_system_info_service(FailingSystemInfoService())

    yield {"file_service": file_service, "message_relay": message_relay}

    service_locator.set_file_service(None)
    service_locator.set_message_relay(None)
    service_locator.set_system_info_service(None)


@pytest.fixture
def client(hub_services):
    """Create FastAPI test client sharing one event loop across sockets."""
    with TestClient(app) as test_client:
        yield test_client

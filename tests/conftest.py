"""Shared pytest fixtures for all tests."""

import pytest
import pytest_asyncio

from client.data_client import DataServiceClient
from dataserver.grpc_server import create_server
from dataserver.service import DataService


def pattern_bytes(size: int) -> bytes:
    """Deterministic content whose period (251) never lines up with the chunk size."""
    return bytes(i % 251 for i in range(size))


@pytest.fixture
def make_file(tmp_path):
    """
    Factory creating files of a given size.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Callable (size, name=None) -> Path of the written file
    """
    def _make(size: int, name: str = None):
        file_path = tmp_path / (name or f'file_{size}.bin')
        file_path.write_bytes(pattern_bytes(size))
        return file_path

    return _make


@pytest.fixture
def data_service():
    """DataService with the default tables."""
    return DataService()


@pytest_asyncio.fixture
async def server_target(data_service):
    """
    Run an in-process gRPC server on an ephemeral port.

    Returns:
        "host:port" target of the running server
    """
    server = create_server(data_service)
    port = server.add_insecure_port('127.0.0.1:0')
    await server.start()
    yield f'127.0.0.1:{port}'
    await server.stop(None)


@pytest_asyncio.fixture
async def client(server_target):
    """DataServiceClient connected to the in-process server."""
    data_client = DataServiceClient(server_target, timeout=10, max_retries=1)
    yield data_client
    await data_client.close()

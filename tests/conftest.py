import pytest

from json_client.services.mock_transport import MockTransport
from json_client.services.request_executor import RequestExecutor

BASE_URL = "https://api.example.com"


@pytest.fixture()
def transport():
    return MockTransport()


@pytest.fixture()
def client(transport):
    return RequestExecutor(BASE_URL, transport=transport)

# pyright: reportUnknownParameterType=false, reportMissingParameterType=false
import pytest
import requests
from requests.structures import CaseInsensitiveDict

from conduit.networking import api
from conduit.networking.config import ApiConfiguration

BASE_URL = "https://api.example.com"


@pytest.fixture(autouse=True)
def _reset_global_state():
    api.reset()
    yield
    api.reset()


@pytest.fixture
def config():
    return ApiConfiguration(base_url=BASE_URL, timeout=5.0)


@pytest.fixture
def configured(config):
    api.configure(config)
    return config


@pytest.fixture
def make_response():
    def _make_response(
        *,
        content: bytes = b"",
        status: int = 200,
        url: str = BASE_URL,
        reason: str = "OK",
        headers=None,
    ) -> requests.Response:
        response = requests.Response()
        response._content = content
        response._content_consumed = True
        response.status_code = status
        response.url = url
        response.reason = reason
        response.headers = CaseInsensitiveDict(
            headers
            if headers is not None
            else {"Content-Type": "application/json"}
        )
        return response

    return _make_response

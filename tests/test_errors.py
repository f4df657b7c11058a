import copy
import pickle

import pytest

from json_client.services.errors import (
    ClientError,
    ErrorKind,
    HttpError,
    NetworkError,
    RequestTimeoutError,
    classify,
)


@pytest.mark.parametrize(
    "status,message",
    [
        (400, "Client error: 400"),
        (499, "Client error: 499"),
        (500, "Server error: 500"),
        (599, "Server error: 599"),
        (302, "HTTP error: 302"),
        (600, "HTTP error: 600"),
    ],
)
def test_http_error_default_messages(status, message):
    error = HttpError(status)

    assert error.status == status
    assert error.message == message
    assert str(error) == message


def test_http_error_keeps_given_message():
    assert HttpError(404, "Not Found").message == "Not Found"


def test_default_messages():
    assert RequestTimeoutError().message == "Request timed out"
    assert NetworkError().message == "Network error occurred"
    assert RequestTimeoutError("deadline passed").message == "deadline passed"


def test_timeout_error_is_builtin_timeout():
    assert isinstance(RequestTimeoutError(), TimeoutError)


def test_classify_covers_every_kind():
    assert classify(RequestTimeoutError()) is ErrorKind.TIMEOUT
    assert classify(HttpError(500)) is ErrorKind.HTTP
    assert classify(NetworkError()) is ErrorKind.NETWORK
    assert classify(ValueError("x")) is ErrorKind.UNCLASSIFIED


def describe(error: Exception) -> str:
    match error:
        case RequestTimeoutError(message):
            return f"timeout: {message}"
        case HttpError(status, message) if status >= 500:
            return f"server {status}: {message}"
        case HttpError(status):
            return f"http {status}"
        case NetworkError():
            return "network"
        case _:
            return "other"


def test_errors_support_pattern_matching():
    assert describe(RequestTimeoutError()) == "timeout: Request timed out"
    assert describe(HttpError(502)) == "server 502: Server error: 502"
    assert describe(HttpError(404)) == "http 404"
    assert describe(NetworkError()) == "network"
    assert describe(KeyError("x")) == "other"


def test_all_kinds_share_a_base_class():
    for error in (RequestTimeoutError(), HttpError(400), NetworkError()):
        assert isinstance(error, ClientError)


@pytest.mark.parametrize(
    "error",
    [HttpError(404), HttpError(503, "Service Unavailable"), RequestTimeoutError("late"), NetworkError()],
)
def test_errors_survive_pickle_and_copy(error):
    for clone in (pickle.loads(pickle.dumps(error)), copy.copy(error), copy.deepcopy(error)):
        assert type(clone) is type(error)
        assert clone.message == error.message
        assert getattr(clone, "status", None) == getattr(error, "status", None)

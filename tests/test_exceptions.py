from mediumpy import Medium
from mediumpy.exceptions import (
    InvalidEndpointError,
    MissingPathParameterError,
    UnexpectedPayloadError,
    UnsupportedMethodError,
    URLPathError,
    URLSchemaError,
)

from .conftest import API_KEY


def test_unsupported_method_without_client():
    error = UnsupportedMethodError(method="PUT")
    assert str(error) == "\nPUT not supported by this API"


def test_invalid_endpoint_mentions_client_and_path():
    error = InvalidEndpointError(
        "Path 'user' does not begin with /",
        client=Medium(api_key=API_KEY),
        endpoint_path="user",
    )
    message = str(error)
    assert message.startswith("Path 'user' does not begin with /")
    assert "Medium: Invalid endpoint path provided." in message
    assert "Base URL: https://medium2.p.rapidapi.com" in message
    assert "Endpoint path: user" in message


def test_unexpected_payload():
    error = UnexpectedPayloadError(
        endpoint_path="/user/id_for/{username}", field="id", payload={"a": 1}
    )
    message = str(error)
    assert "Missing field 'id' in response from /user/id_for/{username}" in message
    assert "Unexpected response: {'a': 1}" in message


def test_missing_path_parameter():
    error = MissingPathParameterError(
        parameter="user_id", available_params="tag", endpoint_path="/user/{user_id}"
    )
    message = str(error)
    assert "Missing path parameter: user_id" in message
    assert "Available parameters: tag" in message
    assert "Endpoint path: /user/{user_id}" in message


def test_url_errors():
    assert "must start with 'http://' or 'https://'" in str(
        URLSchemaError(base_url="ftp://example.com")
    )
    assert str(URLPathError(base_url="https://example.com/")).endswith(
        "https://example.com/"
    )

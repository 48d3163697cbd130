import httpx
import pytest

from mediumpy.base import ApiError, RestApiBaseClass
from mediumpy.exceptions import (
    InvalidEndpointError,
    MissingPathParameterError,
    URLNetlocError,
    URLPathError,
    URLSchemaError,
)

from .conftest import API_KEY


class ExampleClient(RestApiBaseClass):
    MAX_CONNECTIONS = 1
    USER_AGENT = "example-client"
    REDACTED_HEADERS = ("x-token",)

    def _authenticate(self) -> None:
        self.headers["x-token"] = "secret-token"

    @property
    def is_authenticated(self) -> bool:
        return "x-token" in self.headers

    async def get(self, path, *, params=None, path_params=None, headers=None, timeout=None):
        return await self.request(
            "GET",
            path,
            params=params,
            path_params=path_params,
            headers=headers,
            timeout=timeout,
        )

    async def post(self, *args, **kwargs):
        raise NotImplementedError

    async def put(self, *args, **kwargs):
        raise NotImplementedError

    async def patch(self, *args, **kwargs):
        raise NotImplementedError

    async def delete(self, *args, **kwargs):
        raise NotImplementedError


@pytest.fixture
def example_client():
    return ExampleClient(base_url="https://api.example.com/v1")


class TestBaseUrl:
    @pytest.mark.parametrize(
        "base_url, error",
        [
            ("ftp://api.example.com", URLSchemaError),
            ("api.example.com", URLSchemaError),
            ("https://", URLNetlocError),
            ("https://api.example.com/v1/", URLPathError),
        ],
    )
    def test_invalid_base_url(self, base_url, error):
        with pytest.raises(error):
            ExampleClient(base_url=base_url)

    def test_valid_base_url(self):
        client = ExampleClient(base_url="http://localhost:8080")
        assert client.base_url == "http://localhost:8080"


class TestBuildUrl:
    def test_substitutes_path_params(self, example_client):
        url = example_client.build_url("/user/{user_id}/lists", {"user_id": "u1"})
        assert url == "https://api.example.com/v1/user/u1/lists"

    def test_encodes_path_params(self, example_client):
        url = example_client.build_url("/tag/{tag}", {"tag": "a b/c?"})
        assert url == "https://api.example.com/v1/tag/a%20b%2Fc%3F"

    def test_missing_path_param(self, example_client):
        with pytest.raises(MissingPathParameterError) as exc_info:
            example_client.build_url("/user/{user_id}", {"other": "x"})

        assert exc_info.value.parameter == "user_id"
        assert "Available parameters: other" in str(exc_info.value)


class TestFilterParams:
    def test_drops_empty_values(self):
        params = {
            "none": None,
            "empty": "",
            "empty_list": [],
            "zero": 0,
            "false": False,
            "text": "x",
        }
        assert RestApiBaseClass.filter_params(params) == {
            "zero": 0,
            "false": False,
            "text": "x",
        }

    def test_none(self):
        assert RestApiBaseClass.filter_params(None) == {}

    def test_input_is_not_modified(self):
        params = {"a": None}
        RestApiBaseClass.filter_params(params)
        assert params == {"a": None}


def test_missing_class_variable():
    with pytest.raises(TypeError, match="USER_AGENT"):

        class IncompleteClient(RestApiBaseClass):
            MAX_CONNECTIONS = 1

            _authenticate = ExampleClient._authenticate
            is_authenticated = ExampleClient.is_authenticated
            get = ExampleClient.get
            post = ExampleClient.post
            put = ExampleClient.put
            patch = ExampleClient.patch
            delete = ExampleClient.delete


@pytest.mark.asyncio
async def test_path_must_start_with_slash(example_client):
    example_client.client = httpx.AsyncClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={}))
    )

    with pytest.raises(InvalidEndpointError):
        await example_client.get("user/u1")


@pytest.mark.asyncio
async def test_credentials_are_redacted_in_log(make_medium, log_messages):
    medium = make_medium(lambda request: httpx.Response(200, json={"id": "u1"}))

    await medium.get_user_id("someone")

    log_text = "\n".join(log_messages)
    assert "Request #1: GET https://medium2.p.rapidapi.com/user/id_for/someone" in log_text
    assert "********" in log_text
    assert API_KEY not in log_text


@pytest.mark.asyncio
async def test_get_json_with_base_path(example_client):
    example_client.client = httpx.AsyncClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(401))
    )

    result = await example_client.get_json("/secure")

    assert result == ApiError(
        endpoint="/v1/secure", status_code=401, reason="Unauthorized"
    )
    assert example_client.is_authenticated


@pytest.mark.asyncio
async def test_aclose_without_client(example_client):
    await example_client.aclose()
    assert example_client.client is None

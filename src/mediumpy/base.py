# SPDX-License-Identifier: GPL-3.0-or-later
#
# Copyright (C) 2025 Wingmen Solutions ApS
# This file is part of mediumpy, distributed under the terms of the GNU GPLv3.
# See the LICENSE, NOTICE, and AUTHORS files for more information.

import json
from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from ssl import SSLContext
from typing import Any, ClassVar, get_type_hints
from urllib.parse import quote, urlparse

import arrow
import httpx

from mediumpy.exceptions import (
    InvalidEndpointError,
    MissingPathParameterError,
    UnexpectedPayloadError,
    URLNetlocError,
    URLPathError,
    URLSchemaError,
)
from mediumpy.interfaces import ApiClient
from mediumpy.logger import log_exception, logger

_MISSING = object()


@dataclass
class RequestLogEntry:
    """
    Log entry for a received response.
    """

    status_code: int
    """The HTTP status code of the response."""

    timestamp: arrow.Arrow
    """The timestamp of when the response was received."""

    url: str | None
    """The URL of the request."""


@dataclass(frozen=True)
class ApiError:
    """
    Returned instead of a JSON payload when the API responds with a
    non-success HTTP status code.

    Callers check for it with `isinstance(result, ApiError)`.

    Examples
    --------
    ```python
    info = await medium.get_user_info("unknown")
    if isinstance(info, ApiError):
        print(info.error)
    ```
    """

    endpoint: str
    """The endpoint path that was requested."""

    status_code: int
    """The HTTP status code of the response."""

    reason: str
    """The HTTP reason phrase of the response."""

    @property
    def error(self) -> str:
        """A human-readable error description."""
        return f"Error fetching {self.endpoint}: {self.status_code} {self.reason}"

    def __str__(self) -> str:
        return self.error


class RequireClassVarsMeta(ABCMeta):
    """
    This metaclass ensures that all subclasses of RestApiBaseClass
    define the required class variables.
    It checks for the presence of class variables in the class hierarchy
    and raises a TypeError if any required class variable is missing.

    This is similar to the behavior of the @abstractmethod decorator,
    but for class variables rather than instance methods.

    Examples
    --------
    from abc import ABC
    class MyBaseClass(ABC, metaclass=RequireClassVarsMeta):
        REQUIRED_VAR: ClassVar[str]
        OPTIONAL_VAR: ClassVar[str] = "default_value"

    class MyClass(MyBaseClass):
        REQUIRED_VAR = "value"
    # This will work because MyClass defines the REQUIRED_VAR class variable.

    class MyClassWithoutRequiredVar(MyBaseClass):
        OPTIONAL_VAR = "new_value"
    # This will raise a TypeError because MyClassWithoutRequiredVar does not define
    # the REQUIRED_VAR class variable.
    """

    def __init__(cls, name, bases, namespace):
        super().__init__(name, bases, namespace)

        # Abstract classes are allowed to leave class variables undefined
        if getattr(cls, "__abstractmethods__", None):
            return

        required = {}

        for base in cls.__mro__:
            if base is object:
                continue

            required.update(get_type_hints(base))

        for var_name in required:
            if not hasattr(cls, var_name):
                raise TypeError(f"{name} must define class variable '{var_name}'")


class RestApiBaseClass(ApiClient, metaclass=RequireClassVarsMeta):
    """
    An abstract base class for asynchronous REST API clients.

    This class provides a common interface and functionality for interacting
    with REST APIs. It handles requests, headers, path parameters, query
    parameters, logging, error values and session lifetime.
    It also defines the abstract methods that must be implemented by clients.
    """

    MAX_CONNECTIONS: ClassVar[int]
    """
    The maximum number of concurrent connections opened to the API server.
    """

    USER_AGENT: ClassVar[str]
    """
    The client identifier sent in the `User-Agent` header of every request.
    """

    REDACTED_HEADERS: ClassVar[tuple[str, ...]] = ()
    """
    Lower-case names of headers carrying credentials.

    Their values are never written to the log.
    """

    def __init__(
        self,
        *,
        base_url: str,
        verify: SSLContext | bool = True,
        headers: dict | None = None,
        timeout: float | None = None,
    ):
        self._verify_base_url(base_url)
        self.base_url: str = base_url
        """
        A string containing the base URL of the API server.

        The base URL path must include:

         - Scheme (http / https)
         - Hostname / IP address
         - Base path, if any (MUST NOT end with a `/`)

        Examples
        --------
        - https://medium2.p.rapidapi.com
        - http://localhost:8080/api
        """

        self.verify: SSLContext | bool = verify
        """
        Controls the verification of the API server SSL certificate.

        Examples
        --------

        - `True`: Verify the server's SSL certificate using the system's CA certificates.
        - `False`: Disable SSL certificate verification.
        - `ssl.create_default_context(cafile="my-custom-ca.pem")`: Use a custom CA certificate for verification.
        """

        self.headers: dict = {"User-Agent": self.USER_AGENT}
        """
        A dictionary of HTTP headers to be sent with each request.
        These headers will be merged with any `headers` dict passed to an individual request.
        """
        self.headers.update(headers or {})

        self.request_index: int = 0
        """
        An index to keep track of the number of requests made.
        """

        self.client: httpx.AsyncClient | None = None
        """
        An httpx AsyncClient instance used to send requests to the API server.

        This client is created when the first request is made and is reused for all subsequent requests.
        """

        self.auth_timestamp: arrow.Arrow | None = None
        """
        A timestamp indicating when the credentials were attached to the client.
        """

        self.request_log: list[RequestLogEntry] = []
        """
        A list of responses received from the API server.

        Each entry contains the request URL, status code, and timestamp.
        """

        self.timeout: float | None = timeout
        """
        The timeout in seconds for each request to the API server.

        `None` waits indefinitely.
        """

    @abstractmethod
    def _authenticate(self) -> None:
        """
        Abstract method to attach credentials to the client.
        """
        raise NotImplementedError

    @property
    @abstractmethod
    def is_authenticated(self) -> bool:
        """
        Abstract method to check if the client holds credentials.

        Returns
        -------
        bool
            `True` if authenticated, `False` otherwise.
        """
        raise NotImplementedError

    @abstractmethod
    async def get(
        self,
        path: str,
        *,
        params: dict | None = None,
        path_params: dict | None = None,
        headers: dict | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """
        Abstract method to send a GET request to the API server.

        Applies any API-specific pre- or post-processing.
        """
        raise NotImplementedError

    @abstractmethod
    async def post(self, *args, **kwargs) -> httpx.Response:
        raise NotImplementedError

    @abstractmethod
    async def put(self, *args, **kwargs) -> httpx.Response:
        raise NotImplementedError

    @abstractmethod
    async def patch(self, *args, **kwargs) -> httpx.Response:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, *args, **kwargs) -> httpx.Response:
        raise NotImplementedError

    @property
    def calls(self) -> int:
        """
        The number of requests dispatched by this client.
        """
        return self.request_index

    def authenticate(self) -> None:
        """
        Executes the API-specific authentication process and records the timestamp.

        Notes
        ----
        Authentication will automatically be carried out just-in-time.
        """
        logger.debug("Attaching credentials to client")
        self._authenticate()
        self.auth_timestamp = arrow.utcnow()

    def _credential_headers(self) -> dict:
        """
        Headers carrying credentials, applied after all other headers.

        Per-request headers and changes to `self.headers` cannot remove or
        replace them.
        """
        return {}

    @staticmethod
    def filter_params(params: dict | None) -> dict:
        """
        Drop query parameters without a value.

        `None`, empty strings and empty lists/tuples are omitted.
        Any other value, including `0` and `False`, is kept.

        Parameters
        ----------
        params
            Query parameters as passed by the caller.

        Returns
        -------
        dict
            A new dictionary with only the parameters that will be sent.
        """
        if not params:
            return {}

        return {
            key: value
            for key, value in params.items()
            if value is not None and not (isinstance(value, (str, list, tuple)) and len(value) == 0)
        }

    def _redact(self, headers: httpx.Headers | dict) -> dict:
        redacted = {}
        for name, value in dict(headers).items():
            if name.lower() in self.REDACTED_HEADERS:
                value = "********"
            redacted[name] = value
        return redacted

    def _prepare_request(
        self,
        method: str,
        path: str,
        *,
        timeout: float | None,
        params: dict | None,
        path_params: dict | None,
        headers: dict | None,
    ) -> httpx.Request:
        """
        Create headers, filter query parameters, replace path parameters and build the URL.

        Parameters
        ----------

        method
            The HTTP method to use for the request.
        path
            The API endpoint path to send the request to.
        params
            Query parameters. Parameters without a value are dropped.
        path_params
            A dictionary of path parameters to be used in the API path.
        headers
            A dictionary of HTTP headers to be sent with the request.
            Is merged with `self.headers`.

        Returns
        -------
        httpx.Request
            The prepared request object.
        """

        if not path.startswith("/"):
            error = InvalidEndpointError(
                f"Path '{path}' does not begin with /", client=self, endpoint_path=path
            )
            log_exception(error, severity="ERROR")
            raise error

        merged_headers = self.headers.copy()
        if isinstance(headers, dict):
            merged_headers.update(headers)
        merged_headers.update(self._credential_headers())

        if path_params is not None and not isinstance(path_params, dict):
            raise TypeError("path_params must be dictionary")

        if timeout is None:
            timeout = httpx.USE_CLIENT_DEFAULT

        url = self.build_url(path, path_params=path_params)

        request = self.client.build_request(
            method,
            url,
            headers=merged_headers,
            params=self.filter_params(params),
            timeout=timeout,
        )
        return request

    async def _send_single_request(
        self,
        *,
        request: httpx.Request,
        request_log_prefix: str,
        response_log_prefix: str,
    ) -> httpx.Response:
        """
        Send a request with logging and transport error handling.

        Parameters
        ----------
        request
            The request object to be sent.
        request_log_prefix
            A string prefix for the request log entry.
        response_log_prefix
            A string prefix for the response log entry.

        Returns
        -------
        httpx.Response
            The response object.

        Raises
        ------
        httpx.RequestError
            If the request could not be sent or no response was received.
        """

        logger.trace(f"Prepared {request_log_prefix}: {request.method} {request.url}")
        request_header_json = json.dumps(self._redact(request.headers))
        logger.trace(f"Prepared {request_log_prefix} headers: {request_header_json}")

        try:
            response = await self.client.send(request)
            self.request_log.append(
                RequestLogEntry(
                    url=str(response.url),
                    status_code=response.status_code,
                    timestamp=arrow.utcnow(),
                ),
            )
        except httpx.RequestError as error:
            log_exception(error, severity="CRITICAL")
            raise error

        logger.debug(f"{request_log_prefix}: {request.method} {request.url}")

        response_header_json = json.dumps(dict(response.headers))
        logger.trace(
            f"{response_log_prefix} status code: {response.status_code} {response.reason_phrase}"
        )
        logger.trace(f"{response_log_prefix} headers: {response_header_json}")
        logger.trace(f"{response_log_prefix} body: {response.text}")

        return response

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict | None = None,
        path_params: dict | None = None,
        headers: dict | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """
        Send any type of HTTP request and receive response.

        Each call sends exactly one request. Responses are returned regardless
        of their status code, failures are logged.

        Parameters
        ----------
        method
            The HTTP method to use for the request.

        path : str
            URL endpoint path. Is combined with `self.base_url`.

        params : dict
            Query parameters to include in the request.

        path_params
            A dictionary of path parameters to be used in the API path.

        headers
            A dictionary of HTTP headers to be sent with the request.
            Is merged with `self.headers`.

        timeout
            Number of seconds to wait for the HTTP response before raising httpx.TimeoutException exception.

        Returns
        -------
        httpx.Response
            The response object returned by the API server.
        """

        self._ensure_client()
        self._ensure_auth()

        request = self._prepare_request(
            method,
            path,
            params=params,
            path_params=path_params,
            headers=headers,
            timeout=timeout,
        )

        self.request_index += 1
        request_log_prefix = f"Request #{self.request_index}"
        response_log_prefix = f"Response #{self.request_index}"

        response = await self._send_single_request(
            request=request,
            request_log_prefix=request_log_prefix,
            response_log_prefix=response_log_prefix,
        )

        if not response.is_success:
            logger.error(
                f"{request_log_prefix} failed with status code {response.status_code}"
            )

        return response

    async def get_json(
        self,
        path: str,
        *,
        params: dict | None = None,
        path_params: dict | None = None,
    ) -> Any:
        """
        Send a `GET` request and return the decoded JSON body.

        Parameters
        ----------
        path : str
            The API endpoint path to send the request to.

        params : dict | None, default=None
            URL query parameters. Parameters without a value are not sent.

        path_params : dict | None, default=None
            Replace placeholders like `{user_id}` in the URL path with actual values.

        Returns
        -------
        Any | ApiError
            The decoded JSON body as returned by the API,
            or an `ApiError` if the API responded with a non-success status code.

        Raises
        ------
        httpx.RequestError
            If the API server could not be reached.
        json.JSONDecodeError
            If a successful response does not contain valid JSON.
        """
        response = await self.get(path, params=params, path_params=path_params)

        if not response.is_success:
            return ApiError(
                endpoint=response.request.url.path,
                status_code=response.status_code,
                reason=response.reason_phrase,
            )

        try:
            return response.json()
        except json.JSONDecodeError as error:
            log_exception(error, severity="ERROR")
            raise error

    async def get_field(
        self,
        path: str,
        field: str,
        *,
        params: dict | None = None,
        path_params: dict | None = None,
        default: Any = _MISSING,
    ) -> Any:
        """
        Send a `GET` request and return a single field of the JSON body.

        Parameters
        ----------
        path : str
            The API endpoint path to send the request to.

        field : str
            The top-level key to return from the JSON body.

        default : Any, optional
            Returned when the field is missing or empty.
            Without a default, a missing field raises `UnexpectedPayloadError`.

        Returns
        -------
        Any | ApiError
            The value of the field, or the `ApiError` returned by `get_json`.
        """
        payload = await self.get_json(path, params=params, path_params=path_params)

        if isinstance(payload, ApiError):
            return payload

        if isinstance(payload, dict) and field in payload:
            value = payload[field]
            if default is not _MISSING and not value:
                return default
            return value

        if default is not _MISSING:
            return default

        endpoint_path = httpx.URL(self.build_url(path, path_params)).path
        error = UnexpectedPayloadError(
            endpoint_path=endpoint_path, field=field, payload=payload
        )
        log_exception(error, severity="ERROR")
        raise error

    def _verify_base_url(self, base_url: str) -> None:
        """
        Verifies the base URL contains a scheme, hostname, and does not end with a `/`.

        Parameters
        ----------
        base_url
            The base URL to be verified.

        Raises
        ------
        URLSchemaError
            If the base URL does not contain a scheme (http or https).
        URLNetlocError
            If the base URL does not contain a hostname or IP address.
        URLPathError
            If the base URL path ends with a `/`.
        """
        parsed_url = urlparse(base_url)
        if parsed_url.scheme.lower() not in ("http", "https"):
            error = URLSchemaError(base_url=base_url)
            log_exception(error, severity="ERROR")
            raise error
        if not parsed_url.netloc:
            error = URLNetlocError(base_url=base_url)
            log_exception(error, severity="ERROR")
            raise error
        if parsed_url.path and parsed_url.path[-1] == "/":
            error = URLPathError(base_url=base_url)
            log_exception(error, severity="ERROR")
            raise error

    def build_url(self, path: str, path_params: dict | None = None) -> str:
        """
        Constructs the full URL for a request.

        Combines the base URL with the provided path and substitutes any path parameters.
        Path parameters are variables embedded into the URL path using {} braces.
        __Example:__ /user/{user_id}/followers

        Substituted values are percent-encoded, so each one stays a single path segment.

        Parameters
        ----------
        path
            The URL path, which may include placeholders for path parameters.

        path_params
            A dictionary of path parameters to be used in the API path.

        Returns
        -------
        str
            The fully constructed URL with all path parameters substituted.

        Raises
        ------

        MissingPathParameterError
            If the path contains placeholders that are not in the path_params dictionary.
        """

        merged_path_params = dict(path_params or {})

        encoded_path_params = {
            key: quote(str(value), safe="@") for key, value in merged_path_params.items()
        }

        try:
            url = self.base_url + path.format(**encoded_path_params)
        except KeyError as e:
            missing_param = e.args[0]
            available_params = ", ".join(merged_path_params.keys())
            error = MissingPathParameterError(
                parameter=missing_param,
                available_params=available_params,
                endpoint_path=path,
                client=self,
            )
            log_exception(error, severity="ERROR")
            raise error

        return url

    def _ensure_client(self):
        """
        Instantiate a new `httpx` async client if needed.

        Issues a warning if SSL verification is disabled.
        """

        if not self.client:
            limits = httpx.Limits(
                max_keepalive_connections=self.MAX_CONNECTIONS,
                max_connections=self.MAX_CONNECTIONS,
                keepalive_expiry=60,
            )

            if not self.verify:
                logger.warning(
                    f"Disabling SSL verification for {self.base_url} session"
                )
            self.client = httpx.AsyncClient(
                verify=self.verify,
                timeout=self.timeout,
                http2=False,
                limits=limits,
            )

    def _ensure_auth(self):
        """
        Attach credentials if this is the first request.
        """
        if self.auth_timestamp is None:
            logger.debug("No credentials attached")
            self.authenticate()

    async def aclose(self) -> None:
        """
        Close the httpx client and release any resources.
        This method should be called when the client is no longer needed.
        It is automatically called when exiting the async context manager.
        """
        if self.client:
            await self.client.aclose()
            logger.debug("Closed API client")
            self.client = None

    async def __aenter__(self):
        """
        Enter the runtime context of an `async with` statement.

        Returns
        -------
        self
            The instance of the class itself.
        """
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> bool:
        """
        Close the client when exiting the runtime context.

        Returns
        -------
        bool
            Always `False`, so exceptions raised inside the context are propagated.
        """
        await self.aclose()
        if exc_type is not None:
            logger.error(f"Exception occurred: {exc_value}")
        return False

# SPDX-License-Identifier: GPL-3.0-or-later
#
# Copyright (C) 2025 Wingmen Solutions ApS
# This file is part of mediumpy, distributed under the terms of the GNU GPLv3.
# See the LICENSE, NOTICE, and AUTHORS files for more information.
from dataclasses import dataclass
from typing import Literal

from rich import traceback

from mediumpy.interfaces import ApiClient


@dataclass
class MediumpyException(Exception):
    """
    Base exception class for all mediumpy exceptions.
    """

    message: str = ""

    def __post_init__(self):
        traceback.install()


@dataclass
class UnsupportedMethodError(MediumpyException):
    """
    Raised when the an unsupported HTTP method is used on a client instance.

    The Medium API is read-only, so only `GET` is implemented.

    Examples
    --------

    1. The user calls the `.post()` method on a `Medium` instance.
    2. The exception is raised.
    """

    method: Literal["DELETE", "GET", "PATCH", "POST", "PUT"] | None = None
    """The HTTP method that is not supported."""

    client: ApiClient | None = None
    """The client instance that does not support the method."""

    def __str__(self) -> str:
        msg = self.message

        if isinstance(self.client, ApiClient):
            client_name = self.client.__class__.__name__
        else:
            client_name = "this API"

        if self.method:
            msg += f"\n{self.method} not supported by {client_name}"

        return msg


@dataclass
class InvalidEndpointError(MediumpyException):
    """
    Raised when the specified API endpoint path is not valid for use in a URL.
    """

    client: ApiClient | None = None
    """The client instance that is making the request."""

    endpoint_path: str | None = None
    """The invalid endpoint path."""

    def __str__(self) -> str:
        msg = self.message

        if isinstance(self.client, ApiClient):
            client_name = self.client.__class__.__name__
            msg += f"\n{client_name}: Invalid endpoint path provided."
            msg += f"\nBase URL: {self.client.base_url}"

        if self.endpoint_path:
            msg += f"\nEndpoint path: {self.endpoint_path}"

        return msg


@dataclass
class UnexpectedPayloadError(MediumpyException):
    """
    Raised when the API returned a payload without the expected field.
    """

    endpoint_path: str | None = None
    """The endpoint path that returned the payload."""

    field: str | None = None
    """The field that was expected in the payload."""

    payload: dict | list | None = None
    """The decoded JSON payload returned by the API."""

    def __str__(self) -> str:
        msg = self.message

        if self.field:
            msg += f"\nMissing field '{self.field}'"
            if self.endpoint_path:
                msg += f" in response from {self.endpoint_path}"
        if self.payload is not None:
            msg += f"\nUnexpected response: {self.payload}"

        return msg


@dataclass
class URLSchemaError(MediumpyException):
    """
    Raised when the provided base URL does not include a valid schema (http or https).
    """

    base_url: str | None = None
    """The invalid base URL."""

    def __str__(self) -> str:
        msg = self.message

        if self.base_url:
            msg += f"\nInvalid base URL: {self.base_url}"
            msg += "\nThe base URL must start with 'http://' or 'https://'."

        return msg


@dataclass
class URLNetlocError(MediumpyException):
    """
    Raised when the provided base URL does not include a valid network location.
    """

    base_url: str | None = None
    """The invalid base URL."""

    def __str__(self) -> str:
        msg = self.message

        if self.base_url:
            msg += f"\nInvalid base URL: {self.base_url}"
            msg += "\nThe base URL must include a valid network location."

        return msg


@dataclass
class URLPathError(MediumpyException):
    """
    Raised when the provided base URL ends with a forward slash (/).
    """

    base_url: str | None = None
    """The invalid base URL."""

    def __str__(self) -> str:
        msg = self.message

        if self.base_url:
            msg += f"Invalid base URL. Must not end with a '/': {self.base_url}"

        return msg


@dataclass
class MissingPathParameterError(MediumpyException):
    """
    Raised when a required path parameter is missing for URL construction.
    """

    parameter: str | None = None
    """The missing path parameter."""

    available_params: str | None = None
    """The available path parameters."""

    client: ApiClient | None = None
    """The client instance that is making the request."""

    endpoint_path: str | None = None
    """The endpoint path where the parameter is missing."""

    def __str__(self) -> str:
        msg = self.message

        if isinstance(self.client, ApiClient):
            client_name = self.client.__class__.__name__
            msg += f"{client_name}: Missing path parameter."

        if self.parameter:
            msg += f"\nMissing path parameter: {self.parameter}"
        if self.available_params:
            msg += f"\nAvailable parameters: {self.available_params}"
        if self.endpoint_path:
            msg += f"\nEndpoint path: {self.endpoint_path}"

        return msg

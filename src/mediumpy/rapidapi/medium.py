# SPDX-License-Identifier: GPL-3.0-or-later
#
# Copyright (C) 2025 Wingmen Solutions ApS
# This file is part of mediumpy, distributed under the terms of the GNU GPLv3.
# See the LICENSE, NOTICE, and AUTHORS files for more information.

import os
from ssl import SSLContext

import httpx

from mediumpy.base import ApiError, RestApiBaseClass
from mediumpy.exceptions import UnsupportedMethodError
from mediumpy.logger import log_exception
from mediumpy.parsing import extract_article_id


class Medium(RestApiBaseClass):
    """
    Interact with the unofficial Medium API hosted on RapidAPI.

    Every endpoint method sends a single `GET` request and returns the
    decoded JSON body, or one field of it where documented.

    When the API responds with a non-success status code, the methods
    return an [`ApiError`][mediumpy.base.ApiError] instead of raising.
    Network failures are raised as `httpx.RequestError`.

    Parameters
    ----------
    api_key : str | None, default=None
        RapidAPI key for the Medium API.

        Overrides the environment variable `MEDIUMPY_API_KEY`.

    verify : bool | SSLContext, default=True
        Boolean values will enable or disable the default SSL verification.

        Use an ssl.SSLContext to specify custom Certificate Authority.

    timeout : float | None, default=None
        Number of seconds to wait for HTTP responses before raising httpx.TimeoutException exception.

        `None` waits indefinitely.

    Examples
    --------
    ```python
    import asyncio
    from mediumpy import Medium

    async def main():
        async with Medium(api_key="0123456789abcdef") as medium:
            user_id = await medium.get_user_id("nishu-jain")
            return await medium.get_user_info(user_id)

    asyncio.run(main())
    ```
    """

    MAX_CONNECTIONS = 10
    """
    The maximum number of concurrent connections opened to the Medium API.
    """

    USER_AGENT = "mediumpy"

    REDACTED_HEADERS = ("x-rapidapi-key",)

    extract_article_id = staticmethod(extract_article_id)

    def __init__(
        self,
        api_key: str | None = None,
        *,
        verify: SSLContext | bool = True,
        timeout: float | None = None,
    ):
        self.medium_base_url = "https://medium2.p.rapidapi.com"
        """The base URL for the Medium API."""

        # Allow parameters to be passed directly or fallback to environment variables

        self._api_key = api_key or os.getenv("MEDIUMPY_API_KEY")

        if not self._api_key:
            raise ValueError(
                "Medium API key must be provided either as argument or environment variable"
            )

        super().__init__(
            base_url=self.medium_base_url,
            verify=verify,
            headers={
                "Accept": "application/json",
                "x-rapidapi-host": "medium2.p.rapidapi.com",
            },
            timeout=timeout,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_url={self.base_url!r})"

    def _authenticate(self) -> None:  # type: ignore
        """
        No dedicated authentication is available for the Medium API.

        The RapidAPI key is attached as a header to every request
        by `_credential_headers`.
        """

    def _credential_headers(self) -> dict:
        return {"x-rapidapi-key": self._api_key}

    @property
    def is_authenticated(self):
        """
        Check if the client has sent a request with its API key.
        """
        return self.auth_timestamp is not None

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
        Send an HTTP `GET` request to the specified path.

        Parameters
        ----------
        path : str
            The API endpoint path to send the request to.

        params : dict | None, default=None
            URL query parameters to include in the request. will be added as `?key=value` pairs in the URL.

            Parameters with a value of `None`, `""` or an empty list are not sent.

        path_params : dict | None, default=None
            Replace placeholders like `{user_id}` in the URL path with actual values.

        headers : dict | None, default=None
            HTTP headers to be sent with the request.

            Will be combined with `self.headers` before sending request.
            The `x-rapidapi-key` header cannot be overridden.

        timeout : float | None, default=None
            Override the standard timeout timer `self.timeout` for a single request.

        Returns
        -------
        httpx.Response
            The [`httpx.Response`](https://www.python-httpx.org/api/#response) object from the request.
        """

        response = await self.request(
            "GET",
            path,
            params=params,
            path_params=path_params,
            headers=headers,
            timeout=timeout,
        )
        return response

    async def post(self, *args, **kwargs) -> None:  # type: ignore
        """
        !!! failure "HTTP POST is not supported by the Medium API"

        Raises
        ------
        UnsupportedMethodError
        """
        error = UnsupportedMethodError(method="POST", client=self)
        log_exception(error)
        raise error

    async def put(self, *args, **kwargs) -> None:  # type: ignore
        """
        !!! failure "HTTP PUT is not supported by the Medium API"

        Raises
        ------
        UnsupportedMethodError
        """
        error = UnsupportedMethodError(method="PUT", client=self)
        log_exception(error)
        raise error

    async def patch(self, *args, **kwargs) -> None:  # type: ignore
        """
        !!! failure "HTTP PATCH is not supported by the Medium API"

        Raises
        ------
        UnsupportedMethodError
        """
        error = UnsupportedMethodError(method="PATCH", client=self)
        log_exception(error)
        raise error

    async def delete(self, *args, **kwargs) -> None:  # type: ignore
        """
        !!! failure "HTTP DELETE is not supported by the Medium API"

        Raises
        ------
        UnsupportedMethodError
        """
        error = UnsupportedMethodError(method="DELETE", client=self)
        log_exception(error)
        raise error

    async def get_welcome(self) -> dict | ApiError:
        """
        Get the welcome message of the API. Useful to check the API key.
        """
        return await self.get_json("/")

    # Users

    async def get_user_id(self, username: str) -> str | ApiError:
        """
        Look up the user ID of a Medium username.

        Parameters
        ----------
        username : str
            The username without the leading `@`, ie. `"nishu-jain"`.

        Returns
        -------
        str | ApiError
            The user ID, ie. `"1985b61817c3"`.

        Raises
        ------
        UnexpectedPayloadError
            If the response does not contain an `id` field.
        """
        return await self.get_field(
            "/user/id_for/{username}", "id", path_params={"username": username}
        )

    async def get_user_info(self, user_id: str) -> dict | ApiError:
        """
        Get the profile of a user: name, bio, follower count, etc.
        """
        return await self.get_json(
            "/user/{user_id}", path_params={"user_id": user_id}
        )

    async def get_user_articles(
        self, user_id: str, *, next_cursor: str | None = None
    ) -> dict | ApiError:
        """
        Get the IDs of articles written by a user.

        Parameters
        ----------
        user_id : str
            The user ID.

        next_cursor : str | None, default=None
            The `next` value of a previous response, to fetch the following page.

        Returns
        -------
        dict | ApiError
            The JSON body, with the article IDs under `associated_articles`.
        """
        return await self.get_json(
            "/user/{user_id}/articles",
            params={"next": next_cursor},
            path_params={"user_id": user_id},
        )

    async def get_user_top_articles(self, user_id: str) -> dict | ApiError:
        return await self.get_json(
            "/user/{user_id}/top_articles", path_params={"user_id": user_id}
        )

    async def get_user_followers(
        self,
        user_id: str,
        *,
        count: int | None = None,
        after_follower_id: str | None = None,
    ) -> dict | ApiError:
        """
        Get the IDs of users following a user.

        Parameters
        ----------
        user_id : str
            The user ID.

        count : int | None, default=None
            Number of followers to return.

        after_follower_id : str | None, default=None
            Return followers after this follower ID.
        """
        return await self.get_json(
            "/user/{user_id}/followers",
            params={"count": count, "after_follower_id": after_follower_id},
            path_params={"user_id": user_id},
        )

    async def get_user_following(
        self,
        user_id: str,
        *,
        count: int | None = None,
        after_following_id: str | None = None,
    ) -> dict | ApiError:
        """
        Get the IDs of users followed by a user.

        See [`get_user_followers`][mediumpy.rapidapi.medium.Medium.get_user_followers]
        for the meaning of the parameters.
        """
        return await self.get_json(
            "/user/{user_id}/following",
            params={"count": count, "after_following_id": after_following_id},
            path_params={"user_id": user_id},
        )

    async def get_user_interests(self, user_id: str) -> dict | ApiError:
        """
        Get the tags followed by a user.
        """
        return await self.get_json(
            "/user/{user_id}/interests", path_params={"user_id": user_id}
        )

    async def get_user_publications(self, user_id: str) -> dict | ApiError:
        """
        Get the publications where a user is an admin or an editor.
        """
        return await self.get_json(
            "/user/{user_id}/publications", path_params={"user_id": user_id}
        )

    async def get_user_publication_following(self, user_id: str) -> dict | ApiError:
        return await self.get_json(
            "/user/{user_id}/publication_following", path_params={"user_id": user_id}
        )

    async def get_user_lists(self, user_id: str) -> dict | ApiError:
        return await self.get_json(
            "/user/{user_id}/lists", path_params={"user_id": user_id}
        )

    async def get_user_books(self, user_id: str) -> dict | ApiError:
        return await self.get_json(
            "/user/{user_id}/books", path_params={"user_id": user_id}
        )

    async def get_user_responses(
        self, user_id: str, *, next_cursor: str | None = None
    ) -> dict | ApiError:
        """
        Get the IDs of responses (comments) written by a user.

        Parameters
        ----------
        user_id : str
            The user ID.

        next_cursor : str | None, default=None
            The `next` value of a previous response, to fetch the following page.
        """
        return await self.get_json(
            "/user/{user_id}/responses",
            params={"next": next_cursor},
            path_params={"user_id": user_id},
        )

    async def get_user_heatmap(self, user_id: str) -> dict | ApiError:
        """
        Get the daily publishing activity of a user.
        """
        return await self.get_json(
            "/user/{user_id}/heatmap", path_params={"user_id": user_id}
        )

    async def get_top_writers(
        self, topic_slug: str, *, count: int | None = None
    ) -> dict | ApiError:
        """
        Get the IDs of the top writers for a topic, ie. `"artificial-intelligence"`.
        """
        return await self.get_json(
            "/top_writer/{topic_slug}",
            params={"count": count},
            path_params={"topic_slug": topic_slug},
        )

    # Articles

    async def get_article_info(self, article_id: str) -> dict | ApiError:
        """
        Get the metadata of an article: title, author, tags, claps, etc.
        """
        return await self.get_json(
            "/article/{article_id}", path_params={"article_id": article_id}
        )

    async def get_article_content(self, article_id: str) -> str | ApiError:
        """
        Get the plain text content of an article.

        Returns
        -------
        str | ApiError
            The `content` field of the response.
        """
        return await self.get_field(
            "/article/{article_id}/content",
            "content",
            path_params={"article_id": article_id},
        )

    async def get_article_markdown(self, article_id: str) -> str | ApiError:
        """
        Get the content of an article as Markdown.

        Returns
        -------
        str | ApiError
            The `markdown` field of the response.
        """
        return await self.get_field(
            "/article/{article_id}/markdown",
            "markdown",
            path_params={"article_id": article_id},
        )

    async def get_article_html(
        self, article_id: str, *, fullpage: bool | None = None
    ) -> str | ApiError:
        """
        Get the content of an article as HTML.

        Parameters
        ----------
        article_id : str
            The article ID.

        fullpage : bool | None, default=None
            Return a complete HTML document with `<head>` and styling,
            rather than only the article body.

        Returns
        -------
        str | ApiError
            The `html` field of the response.
        """
        return await self.get_field(
            "/article/{article_id}/html",
            "html",
            params={"fullpage": fullpage},
            path_params={"article_id": article_id},
        )

    async def get_article_responses(self, article_id: str) -> list | ApiError:
        """
        Get the IDs of the responses (comments) to an article.

        Returns
        -------
        list | ApiError
            The `responses` field of the response.
        """
        return await self.get_field(
            "/article/{article_id}/responses",
            "responses",
            path_params={"article_id": article_id},
        )

    async def get_article_fans(self, article_id: str) -> dict | ApiError:
        """
        Get the IDs of the users who clapped for an article.
        """
        return await self.get_json(
            "/article/{article_id}/fans", path_params={"article_id": article_id}
        )

    async def get_article_related(self, article_id: str) -> dict | ApiError:
        return await self.get_json(
            "/article/{article_id}/related", path_params={"article_id": article_id}
        )

    async def get_article_recommended(self, article_id: str) -> dict | ApiError:
        return await self.get_json(
            "/article/{article_id}/recommended",
            path_params={"article_id": article_id},
        )

    async def get_article_assets(self, article_id: str) -> dict | ApiError:
        """
        Get the images and embedded media of an article.
        """
        return await self.get_json(
            "/article/{article_id}/assets", path_params={"article_id": article_id}
        )

    # Publications

    async def get_publication_id(self, publication_slug: str) -> str | ApiError:
        """
        Look up the publication ID of a publication slug.

        Parameters
        ----------
        publication_slug : str
            The slug from the publication URL, ie. `"towards-data-science"`.

        Returns
        -------
        str | ApiError
            The `publication_id` field of the response.
        """
        return await self.get_field(
            "/publication/id_for/{publication_slug}",
            "publication_id",
            path_params={"publication_slug": publication_slug},
        )

    async def get_publication_info(self, publication_id: str) -> dict | ApiError:
        return await self.get_json(
            "/publication/{publication_id}",
            path_params={"publication_id": publication_id},
        )

    async def get_publication_articles(
        self, publication_id: str, *, from_date: str | None = None
    ) -> dict | ApiError:
        """
        Get the IDs of articles published in a publication.

        Parameters
        ----------
        publication_id : str
            The publication ID.

        from_date : str | None, default=None
            Only return articles published before this date,
            formatted as `YYYY-MM-DD HH:MM:SS`.
        """
        return await self.get_json(
            "/publication/{publication_id}/articles",
            params={"from_date": from_date},
            path_params={"publication_id": publication_id},
        )

    async def get_publication_newsletter(self, publication_id: str) -> dict | ApiError:
        return await self.get_json(
            "/publication/{publication_id}/newsletter",
            path_params={"publication_id": publication_id},
        )

    # Tags and feeds

    async def get_topfeeds(
        self,
        tag: str,
        mode: str,
        *,
        after: int | None = None,
        count: int | None = None,
    ) -> list | ApiError:
        """
        Get the IDs of articles in a topic feed.

        Parameters
        ----------
        tag : str
            The tag, ie. `"blockchain"`.

        mode : str
            One of `"hot"`, `"new"`, `"top_year"`, `"top_month"`,
            `"top_week"`, `"top_all_time"`.

        after : int | None, default=None
            Skip this many articles.

        count : int | None, default=None
            Number of articles to return.

        Returns
        -------
        list | ApiError
            The `topfeeds` field of the response. An empty list if the feed is empty.
        """
        return await self.get_field(
            "/topfeeds/{tag}/{mode}",
            "topfeeds",
            params={"after": after, "count": count},
            path_params={"tag": tag, "mode": mode},
            default=[],
        )

    async def get_latestposts(
        self, topic_slug: str, *, after: int | None = None
    ) -> dict | ApiError:
        """
        Get the IDs of the latest articles for a topic.
        """
        return await self.get_json(
            "/latestposts/{topic_slug}",
            params={"after": after},
            path_params={"topic_slug": topic_slug},
        )

    async def get_tag_info(self, tag: str) -> dict | ApiError:
        """
        Get the follower, writer and story counts of a tag.
        """
        return await self.get_json("/tag/{tag}", path_params={"tag": tag})

    async def get_related_tags(self, tag: str) -> dict | ApiError:
        return await self.get_json("/related_tags/{tag}", path_params={"tag": tag})

    async def get_recommended_feed(
        self, tag: str, *, page: int | None = None
    ) -> dict | ApiError:
        return await self.get_json(
            "/recommended_feed/{tag}",
            params={"page": page},
            path_params={"tag": tag},
        )

    async def get_recommended_users(self, tag: str) -> dict | ApiError:
        return await self.get_json(
            "/recommended_users/{tag}", path_params={"tag": tag}
        )

    async def get_recommended_lists(self, tag: str) -> dict | ApiError:
        return await self.get_json(
            "/recommended_lists/{tag}", path_params={"tag": tag}
        )

    async def get_archived_articles(
        self,
        tag: str,
        *,
        year: int | None = None,
        month: int | None = None,
        next_cursor: str | None = None,
    ) -> dict | ApiError:
        """
        Get the IDs of archived articles for a tag.

        Parameters
        ----------
        tag : str
            The tag, ie. `"python"`.

        year : int | None, default=None
            Archive year.

        month : int | None, default=None
            Archive month, `1` to `12`. Requires `year`.

        next_cursor : str | None, default=None
            The `next` value of a previous response, to fetch the following page.
        """
        return await self.get_json(
            "/archived_articles/{tag}",
            params={"year": year, "month": month, "next": next_cursor},
            path_params={"tag": tag},
        )

    # Lists

    async def get_list_info(self, list_id: str) -> dict | ApiError:
        return await self.get_json("/list/{list_id}", path_params={"list_id": list_id})

    async def get_list_articles(self, list_id: str) -> dict | ApiError:
        """
        Get the IDs of the articles saved in a list.
        """
        return await self.get_json(
            "/list/{list_id}/articles", path_params={"list_id": list_id}
        )

    async def get_list_responses(self, list_id: str) -> dict | ApiError:
        return await self.get_json(
            "/list/{list_id}/responses", path_params={"list_id": list_id}
        )

    # Search

    async def _search(self, kind: str, query: str) -> dict | ApiError:
        return await self.get_json(
            "/search/{kind}", params={"query": query}, path_params={"kind": kind}
        )

    async def search_users(self, query: str) -> dict | ApiError:
        """
        Search users by name or username.

        Returns
        -------
        dict | ApiError
            The JSON body, with the user IDs under `users`.
        """
        return await self._search("users", query)

    async def search_articles(self, query: str) -> dict | ApiError:
        """
        Search articles by title and content.
        """
        return await self._search("articles", query)

    async def search_publications(self, query: str) -> dict | ApiError:
        return await self._search("publications", query)

    async def search_lists(self, query: str) -> dict | ApiError:
        return await self._search("lists", query)

    async def search_tags(self, query: str) -> dict | ApiError:
        return await self._search("tags", query)

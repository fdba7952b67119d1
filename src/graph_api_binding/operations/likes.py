"""Likes of objects and the interest listings (books, movies, music, ...) of a user."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..adapters.graph import GraphClient
from ..core.paging import PagedList, PagingParameters
from ..models.common import Reference
from ..models.page import Page
from .pages import PAGE_FIELDS


@dataclass(slots=True)
class LikeOperations:
    client: GraphClient

    def like(self, object_id: str) -> None:
        """Like an object on behalf of the authenticated user."""

        self.client.post(object_id, "likes")

    def unlike(self, object_id: str) -> None:
        self.client.remove(object_id, "likes")

    def get_likes(self, object_id: str, paging: Optional[PagingParameters] = None) -> PagedList[Reference]:
        """List the users who liked ``object_id``."""

        return self.client.fetch_connection(object_id, "likes", Reference, paging=paging)

    def get_like_count(self, object_id: str) -> int:
        """
        Return the total number of likes on ``object_id``.

        Only one entry is requested; the count comes from the listing's
        ``summary.total_count``.
        """

        params = {"limit": 1, "offset": 0, "summary": "true"}
        likes = self.client.fetch_connection(object_id, "likes", Reference, params=params)
        return likes.total_count or 0

    def get_pages_liked(self, user_id: str = "me", paging: Optional[PagingParameters] = None) -> PagedList[Page]:
        return self._fetch_pages(user_id, "likes", paging)

    def get_books(self, user_id: str = "me", paging: Optional[PagingParameters] = None) -> PagedList[Page]:
        return self._fetch_pages(user_id, "books", paging)

    def get_movies(self, user_id: str = "me", paging: Optional[PagingParameters] = None) -> PagedList[Page]:
        return self._fetch_pages(user_id, "movies", paging)

    def get_music(self, user_id: str = "me", paging: Optional[PagingParameters] = None) -> PagedList[Page]:
        return self._fetch_pages(user_id, "music", paging)

    def get_television(self, user_id: str = "me", paging: Optional[PagingParameters] = None) -> PagedList[Page]:
        return self._fetch_pages(user_id, "television", paging)

    def get_activities(self, user_id: str = "me", paging: Optional[PagingParameters] = None) -> PagedList[Page]:
        return self._fetch_pages(user_id, "activities", paging)

    def get_interests(self, user_id: str = "me", paging: Optional[PagingParameters] = None) -> PagedList[Page]:
        return self._fetch_pages(user_id, "interests", paging)

    def get_games(self, user_id: str = "me", paging: Optional[PagingParameters] = None) -> PagedList[Page]:
        return self._fetch_pages(user_id, "games", paging)

    def _fetch_pages(self, user_id: str, connection: str, paging: Optional[PagingParameters]) -> PagedList[Page]:
        return self.client.fetch_connection(user_id, connection, Page, fields=PAGE_FIELDS, paging=paging)

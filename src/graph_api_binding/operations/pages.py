"""
Page operations: fetching pages, the accounts a user administers, and page-scoped publishing.

Publishing on behalf of a page uses the page's own access token, which is
looked up from the authenticated user's ``me/accounts`` listing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import LoggerAdapter
from typing import Any, Dict, Iterable, Optional, Union

from ..adapters.base import PageAdministrationError
from ..adapters.graph import GraphClient
from ..core.paging import PagedList, PagingParameters
from ..models.common import ImageType
from ..models.page import Account, Page

PAGE_FIELDS = (
    "id",
    "name",
    "category",
    "description",
    "location",
    "website",
    "picture",
    "phone",
    "affiliation",
    "company_overview",
    "likes",
    "checkins",
    "cover",
)


@dataclass(slots=True, frozen=True)
class PostLink:
    """Link attachment for a feed post. Empty preview fields are left to the API to scrape."""

    url: str
    name: str = ""
    caption: str = ""
    description: str = ""
    picture: str = ""

    def as_form(self) -> Dict[str, str]:
        form = {"link": self.url}
        for key in ("name", "caption", "description", "picture"):
            value = getattr(self, key)
            if value:
                form[key] = value
        return form


@dataclass(slots=True)
class PageOperations:
    """Page-related calls built on top of a :class:`GraphClient`."""

    client: GraphClient
    logger: LoggerAdapter = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.logger = self.client.context.get_logger(self.__class__.__name__)

    def get_page(self, page_id: str, fields: Iterable[str] = ()) -> Page:
        """
        Fetch a page by ID or vanity name.

        Public pages can be read without a token, so the token is only sent
        when the context carries one.
        """

        return self.client.fetch_object(page_id, Page, fields, authenticated=self.client.context.is_authorized)

    def get_page_with_metadata(self, page_id: str) -> Page:
        """Fetch a page together with its introspection ``metadata`` block."""

        return self.client.fetch_object(page_id, Page, params={"metadata": 1}, authenticated=self.client.context.is_authorized)

    def get_accounts(self, paging: Optional[PagingParameters] = None) -> PagedList[Account]:
        """List the pages the authenticated user administers."""

        return self.client.fetch_connection("me", "accounts", Account, paging=paging)

    def get_account(self, page_id: str) -> Optional[Account]:
        """Return the account entry for ``page_id`` or ``None`` when the user is not an admin."""

        paging: Optional[PagingParameters] = None
        while True:
            accounts = self.get_accounts(paging)
            for account in accounts:
                if account.id == page_id:
                    return account
            if accounts.next_page is None or not accounts.data:
                return None
            paging = accounts.next_page

    def is_page_admin(self, page_id: str) -> bool:
        return self.get_account(page_id) is not None

    def post(self, page_id: str, message: str, link: Union[PostLink, str, None] = None) -> str:
        """
        Publish a status (or link) to a page's feed as the page itself.

        Parameters
        ----------
        page_id:
            Page to publish on.
        message:
            Status text.
        link:
            Optional link attachment, either a bare URL or a :class:`PostLink`
            carrying the preview's name, caption, description and picture.

        Returns
        -------
        str
            ID of the created post.

        Raises
        ------
        PageAdministrationError
            When the authenticated user does not administer ``page_id``.
        """

        data: Dict[str, Any] = {"message": message, "access_token": self._page_access_token(page_id)}
        if isinstance(link, PostLink):
            data.update(link.as_form())
        elif link:
            data["link"] = link
        post_id = self.client.publish(page_id, "feed", data)
        self.logger.info("Published page post", extra={"object_id": page_id, "connection": "feed"})
        return post_id

    def post_photo(self, page_id: str, album_id: str, photo: bytes, caption: Optional[str] = None, filename: str = "photo.jpg") -> str:
        """Upload ``photo`` to one of the page's albums and return the photo ID."""

        data: Dict[str, Any] = {"access_token": self._page_access_token(page_id)}
        if caption:
            data["message"] = caption
        files = {"source": (filename, photo, "application/octet-stream")}
        return self.client.publish(album_id, "photos", data, files=files)

    def search(self, query: str, latitude: float, longitude: float, distance: int) -> PagedList[Page]:
        """Search for places near a coordinate; ``distance`` is in meters."""

        params = {
            "q": query,
            "type": "place",
            "center": f"{latitude},{longitude}",
            "distance": distance,
        }
        return self.client.fetch_connection("search", None, Page, params=params)

    def get_picture(self, page_id: str, image_type: Union[ImageType, str] = ImageType.NORMAL) -> bytes:
        return self.client.fetch_binary(page_id, "picture", image_type, authenticated=self.client.context.is_authorized)

    def _page_access_token(self, page_id: str) -> str:
        account = self.get_account(page_id)
        if account is None:
            raise PageAdministrationError(page_id)
        return account.access_token

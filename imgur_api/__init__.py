"""Typed client for the Imgur REST API."""

from imgur_api.main import ImgurAPI
from imgur_api.models import (
    Account,
    Album,
    AuthenticationError,
    Image,
    ImgurError,
    RequestError,
)

__all__ = [
    "Account",
    "Album",
    "AuthenticationError",
    "Image",
    "ImgurAPI",
    "ImgurError",
    "RequestError",
]

"""Models for the Imgur API client."""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional, Tuple


def _known_fields(cls, data: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only the keys of ``data`` that are fields of ``cls``."""
    names = {f.name for f in fields(cls)}
    return {key: value for key, value in data.items() if key in names}


@dataclass(frozen=True)
class Account:
    """Represents an Imgur account."""
    id: Optional[int] = None
    url: Optional[str] = None
    bio: Optional[str] = None
    reputation: Optional[float] = None
    created: Optional[int] = None
    pro_expiration: Any = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Account":
        return cls(**_known_fields(cls, data))


@dataclass(frozen=True)
class Image:
    """Represents an image hosted on Imgur."""
    id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    datetime: Optional[int] = None
    type: Optional[str] = None
    animated: Optional[bool] = None
    width: Optional[int] = None
    height: Optional[int] = None
    size: Optional[int] = None
    views: Optional[int] = None
    bandwidth: Optional[int] = None
    deletehash: Optional[str] = None
    name: Optional[str] = None
    section: Optional[str] = None
    link: Optional[str] = None
    gifv: Optional[str] = None
    mp4: Optional[str] = None
    mp4_size: Optional[int] = None
    looping: Optional[bool] = None
    favorite: Optional[bool] = None
    nsfw: Optional[bool] = None
    vote: Optional[str] = None
    in_gallery: Optional[bool] = None
    account_id: Optional[int] = None
    account_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Image":
        return cls(**_known_fields(cls, data))


@dataclass(frozen=True)
class Album:
    """Represents an album on Imgur.

    ``images`` holds the album's images when the service includes them in
    the response, otherwise it is empty.
    """
    id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    datetime: Optional[int] = None
    cover: Optional[str] = None
    cover_width: Optional[int] = None
    cover_height: Optional[int] = None
    account_url: Optional[str] = None
    account_id: Optional[int] = None
    privacy: Optional[str] = None
    layout: Optional[str] = None
    views: Optional[int] = None
    link: Optional[str] = None
    favorite: Optional[bool] = None
    nsfw: Optional[bool] = None
    section: Optional[str] = None
    order: Optional[int] = None
    deletehash: Optional[str] = None
    images_count: Optional[int] = None
    images: Tuple[Image, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Album":
        values = _known_fields(cls, data)
        values["images"] = tuple(Image.from_dict(item) for item in data.get("images") or [])
        return cls(**values)


@dataclass(frozen=True)
class Envelope:
    """The ``{data, success, status}`` wrapper common to every response."""
    data: Any
    success: bool
    status: int

    @classmethod
    def from_json(cls, payload: Any) -> "Envelope":
        """Build an envelope from a decoded JSON body.

        Raises:
            ValueError: If the payload is not an envelope-shaped object
        """
        if not isinstance(payload, dict) or "success" not in payload:
            raise ValueError("Response body is not an Imgur envelope")
        return cls(
            data=payload.get("data"),
            success=bool(payload["success"]),
            status=int(payload.get("status") or 0),
        )


class ImgurError(Exception):
    """Base exception for Imgur operations."""


class AuthenticationError(ImgurError):
    """Raised when the OAuth pin exchange fails."""


class RequestError(ImgurError):
    """Raised when the service reports an unsuccessful request."""

    def __init__(self, status_code: int, message: str):
        super().__init__(
            f"Request was unsuccessful with status: {status_code} and message: {message}"
        )
        self.status_code = status_code
        self.message = message


__all__ = [
    "Account",
    "Album",
    "AuthenticationError",
    "Envelope",
    "Image",
    "ImgurError",
    "RequestError",
]

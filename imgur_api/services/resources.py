"""Resource clients mapping Imgur endpoints to typed calls."""

import logging
from typing import Any, Dict, Optional, Union

from imgur_api.models import Account, Album, Image
from imgur_api.services.transport import ImgurTransport
from imgur_api.utils.image_utils import ImageSource, to_base64_png

logger = logging.getLogger(__name__)


def _require(value: str, name: str) -> str:
    if not value:
        raise ValueError(f"{name} must be a non-empty string")
    return value


def _form(**fields: Optional[str]) -> Dict[str, str]:
    """Build a form body, omitting fields that were not supplied."""
    return {key: value for key, value in fields.items() if value is not None}


class AccountService:
    """Account endpoints."""

    def __init__(self, transport: ImgurTransport):
        self.transport = transport

    def account(self, username: str) -> Account:
        """Request standard account information of a user."""
        _require(username, "username")
        return Account.from_dict(self.transport.call_record("GET", f"account/{username}"))


class AlbumService:
    """Album endpoints."""

    def __init__(self, transport: ImgurTransport):
        self.transport = transport

    def album(self, album_id: str) -> Album:
        """Get information about an album."""
        _require(album_id, "album_id")
        return Album.from_dict(self.transport.call_record("GET", f"album/{album_id}"))


class ImageService:
    """Image endpoints."""

    def __init__(self, transport: ImgurTransport):
        self.transport = transport

    def image(self, image_id: str) -> Image:
        """Get information about an image."""
        _require(image_id, "image_id")
        return Image.from_dict(self.transport.call_record("GET", f"image/{image_id}"))

    def upload(
        self,
        image: Union[str, ImageSource],
        album: Optional[str] = None,
        image_type: Optional[str] = None,
        name: Optional[str] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Image:
        """Upload a new image.

        Args:
            image: Base64 data or a URL as a string, which is sent unmodified,
                or raw image bytes / a binary stream, which are re-encoded as
                PNG and base64 encoded first
            album: Id of the album to add the image to. For anonymous albums
                this is the album's deletehash
            image_type: Type of the data being sent; file, base64 or URL
            name: Name of the file
            title: Title of the image
            description: Description of the image

        Returns:
            The uploaded image
        """
        if isinstance(image, str):
            payload = image
        else:
            payload = to_base64_png(image)
        if not payload:
            raise ValueError("image payload is required")

        body = _form(
            image=payload,
            album=album,
            type=image_type,
            name=name,
            title=title,
            description=description,
        )
        logger.debug("Uploading image with fields %s", sorted(body))
        return Image.from_dict(self.transport.call_record("POST", "image", data=body))

    def delete(self, image_id: str) -> None:
        """Delete an image by id, or by deletehash for anonymous images."""
        _require(image_id, "image_id")
        self.transport.call("DELETE", f"image/{image_id}")

    def update(
        self, image_id: str, title: Optional[str] = None, description: Optional[str] = None
    ) -> None:
        """Update the title or description of an image."""
        _require(image_id, "image_id")
        body: Dict[str, Any] = _form(title=title, description=description)
        self.transport.call("POST", f"image/{image_id}", data=body)

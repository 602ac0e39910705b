"""Main module for the Imgur API client."""

import argparse
import dataclasses
import logging
import os
import sys
from typing import Any, Dict, List, Optional, Union

import requests
from tabulate import tabulate

from imgur_api.models import Account, Album, Image, ImgurError
from imgur_api.services.resources import AccountService, AlbumService, ImageService
from imgur_api.services.transport import DEFAULT_TIMEOUT, ImgurCredentials, ImgurTransport
from imgur_api.utils.auth import OAuthCoordinator
from imgur_api.utils.image_utils import ImageSource, is_url, upload_name

logger = logging.getLogger(__name__)


class ImgurAPI:
    """Entry point to the Imgur API.

    Requests are sent anonymously with the client id until :meth:`authorize`
    succeeds, after which they carry the access token.
    """

    def __init__(self, client_id: str, client_secret: str, timeout: float = DEFAULT_TIMEOUT):
        """Initialize the client.

        Args:
            client_id: Imgur application client id
            client_secret: Imgur application client secret
            timeout: Seconds to wait for each API response
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.credentials = ImgurCredentials(client_id)
        self.transport = ImgurTransport(self.credentials, timeout=timeout)
        self.account_service = AccountService(self.transport)
        self.album_service = AlbumService(self.transport)
        self.image_service = ImageService(self.transport)
        self.oauth = OAuthCoordinator(self.credentials, client_secret)

    def __enter__(self) -> "ImgurAPI":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False

    def close(self) -> None:
        """Close the underlying HTTP sessions."""
        self.transport.close()
        self.oauth.close()

    @property
    def is_authorized(self) -> bool:
        return self.credentials.token is not None

    def get_authorization_url(self) -> str:
        """Get the authorization URL to send the user to."""
        return self.oauth.get_authorization_url()

    def authorize(self, pin: str) -> Dict[str, Any]:
        """Authorize the client with the pin obtained by the user."""
        return self.oauth.authorize(pin)

    def get_account(self, username: str) -> Account:
        return self.account_service.account(username)

    def get_album(self, album_id: str) -> Album:
        return self.album_service.album(album_id)

    def get_image(self, image_id: str) -> Image:
        return self.image_service.image(image_id)

    def upload_image(
        self,
        image: Union[str, ImageSource],
        album: Optional[str] = None,
        image_type: Optional[str] = None,
        name: Optional[str] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Image:
        """Upload an image from base64 data, a URL, raw bytes or a binary stream.

        For anonymous albums, ``album`` is the deletehash returned when the
        album was created.
        """
        return self.image_service.upload(
            image,
            album=album,
            image_type=image_type,
            name=name,
            title=title,
            description=description,
        )

    def upload_image_file(
        self,
        path: str,
        album: Optional[str] = None,
        name: Optional[str] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Image:
        """Upload a local image file."""
        with open(path, "rb") as stream:
            return self.upload_image(
                stream,
                album=album,
                name=name or upload_name(path),
                title=title,
                description=description,
            )

    def delete_image(self, image_id: str) -> None:
        """Delete an image.

        For an anonymous image ``image_id`` must be its deletehash; for an
        image owned by the authorized account its id is sufficient.
        """
        self.image_service.delete(image_id)

    def update_image(
        self, image_id: str, title: Optional[str] = None, description: Optional[str] = None
    ) -> None:
        """Update the title or description of an image by id or deletehash."""
        self.image_service.update(image_id, title=title, description=description)


def record_rows(record: Any) -> List[List[Any]]:
    """Flatten a model record into field/value rows for display."""
    rows = []
    for item in dataclasses.fields(record):
        value = getattr(record, item.name)
        if item.name == "images":
            value = ", ".join(image.id or "" for image in value)
        if value is not None and value != "":
            rows.append([item.name, value])
    return rows


def print_record(record: Any) -> None:
    print(tabulate(record_rows(record), headers=["Field", "Value"], tablefmt="psql"))


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Imgur API client")

    # Global arguments
    parser.add_argument(
        "--client-id",
        default=os.environ.get("IMGUR_CLIENT_ID"),
        help="Application client id (default: $IMGUR_CLIENT_ID)",
    )
    parser.add_argument(
        "--client-secret",
        default=os.environ.get("IMGUR_CLIENT_SECRET"),
        help="Application client secret (default: $IMGUR_CLIENT_SECRET)",
    )
    parser.add_argument("--pin", help="Authorize with this pin before running the command")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands", required=True)

    subparsers.add_parser("auth-url", help="Print the authorization URL")

    account_parser = subparsers.add_parser("account", help="Show an account")
    account_parser.add_argument("username", help="Account username")

    album_parser = subparsers.add_parser("album", help="Show an album")
    album_parser.add_argument("id", help="Album id")

    image_parser = subparsers.add_parser("image", help="Show an image")
    image_parser.add_argument("id", help="Image id")

    upload_parser = subparsers.add_parser("upload", help="Upload an image")
    upload_parser.add_argument("source", help="Image file path, URL or base64 data")
    upload_parser.add_argument("--album", help="Album id, or deletehash for anonymous albums")
    upload_parser.add_argument("--name", help="File name")
    upload_parser.add_argument("--title", help="Image title")
    upload_parser.add_argument("--description", help="Image description")

    update_parser = subparsers.add_parser("update", help="Update an image")
    update_parser.add_argument("id", help="Image id or deletehash")
    update_parser.add_argument("--title", help="New title")
    update_parser.add_argument("--description", help="New description")

    delete_parser = subparsers.add_parser("delete", help="Delete an image")
    delete_parser.add_argument("id", help="Image id or deletehash")

    return parser.parse_args(argv)


def run_command(api: ImgurAPI, args) -> None:
    """Run the parsed command against the API."""
    if args.pin:
        api.authorize(args.pin)

    if args.command == "auth-url":
        print(api.get_authorization_url())

    elif args.command == "account":
        print_record(api.get_account(args.username))

    elif args.command == "album":
        print_record(api.get_album(args.id))

    elif args.command == "image":
        print_record(api.get_image(args.id))

    elif args.command == "upload":
        options = dict(
            album=args.album, name=args.name, title=args.title, description=args.description
        )
        if os.path.isfile(args.source):
            image = api.upload_image_file(args.source, **options)
        else:
            image_type = "URL" if is_url(args.source) else "base64"
            image = api.upload_image(args.source, image_type=image_type, **options)
        print_record(image)

    elif args.command == "update":
        api.update_image(args.id, title=args.title, description=args.description)
        print(f"Updated image {args.id}")

    elif args.command == "delete":
        api.delete_image(args.id)
        print(f"Deleted image {args.id}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the Imgur API CLI."""
    args = parse_arguments(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if not args.client_id:
        print("Please specify --client-id or set IMGUR_CLIENT_ID")
        return 1

    with ImgurAPI(args.client_id, args.client_secret or "") as api:
        try:
            run_command(api, args)
        except (ImgurError, ValueError) as e:
            print(f"Error: {e}")
            return 1
        except requests.RequestException as e:
            logger.error("Network error: %s", str(e))
            print(f"Network error: {e}")
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

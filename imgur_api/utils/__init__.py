"""Utility functions for the Imgur API client."""

from .auth import OAuthCoordinator, PinApplicationClient
from .image_utils import encode_png, is_url, to_base64_png

__all__ = ["OAuthCoordinator", "PinApplicationClient", "encode_png", "is_url", "to_base64_png"]

"""Transport and resource clients for the Imgur REST API."""

from .resources import AccountService, AlbumService, ImageService
from .transport import ImgurCredentials, ImgurTransport, authorization_header, unwrap

__all__ = [
    "AccountService",
    "AlbumService",
    "ImageService",
    "ImgurCredentials",
    "ImgurTransport",
    "authorization_header",
    "unwrap",
]

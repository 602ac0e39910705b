"""Configuration for unit tests."""

import logging

import pytest
from PIL import Image


@pytest.fixture(autouse=True)
def setup_logging():
    """Configure logging for tests."""
    logging.basicConfig(level=logging.DEBUG)
    yield


@pytest.fixture
def jpeg_bytes(tmp_path):
    """Create a small JPEG image and return its bytes."""
    image_path = tmp_path / "test_image.jpg"
    img = Image.new("RGB", (100, 200), color="red")
    img.save(image_path)
    return image_path.read_bytes()

"""Integration tests running the client against an in-memory Imgur service."""

import base64
import itertools
from urllib.parse import parse_qs, urlparse

import pytest
from PIL import Image

from imgur_api.models import RequestError


class FakeImgur:
    """Minimal in-memory stand-in for the image endpoints."""

    def __init__(self):
        self.images = {}
        self.ids = (f"img{n}" for n in itertools.count(1))

    def _find(self, key):
        for image in self.images.values():
            if key in (image["id"], image["deletehash"]):
                return image
        return None

    def __call__(self, request):
        path = urlparse(request.url).path.split("/3/", 1)[1]
        form = {k: v[0] for k, v in parse_qs(request.body or "").items()}

        if request.method == "POST" and path == "image":
            image_id = next(self.ids)
            image = {
                "id": image_id,
                "deletehash": f"del-{image_id}",
                "title": form.get("title"),
                "description": form.get("description"),
                "name": form.get("name"),
                "size": len(base64.b64decode(form["image"])),
                "link": f"https://i.imgur.com/{image_id}.png",
            }
            self.images[image_id] = image
            return 200, {"data": image, "success": True, "status": 200}

        image = self._find(path.split("/", 1)[1])
        if image is None:
            return 404, {"data": {"error": "Unable to find an image"}, "success": False, "status": 404}
        if request.method == "GET":
            return 200, {"data": image, "success": True, "status": 200}
        if request.method == "POST":
            image.update({k: form[k] for k in ("title", "description") if k in form})
        elif request.method == "DELETE":
            del self.images[image["id"]]
        return 200, {"data": True, "success": True, "status": 200}


@pytest.fixture
def fake_imgur(api, api_adapter):
    """Serve the API client's requests from a FakeImgur instance."""
    service = FakeImgur()
    api_adapter.handler = service
    return service


@pytest.fixture
def test_image(tmp_path):
    """Create a test image file."""
    image_path = tmp_path / "holiday.jpg"
    Image.new("RGB", (64, 32), color="blue").save(image_path)
    return image_path


def test_upload_then_get(api, fake_imgur, test_image):
    """Test that an uploaded image can be fetched with its title and description."""
    uploaded = api.upload_image(test_image.read_bytes(), title="Beach", description="Sunset")

    fetched = api.get_image(uploaded.id)

    assert fetched.title == "Beach"
    assert fetched.description == "Sunset"
    assert fetched == uploaded


def test_upload_file_uses_basename(api, fake_imgur, test_image):
    """Test uploading a local file names it after the file."""
    uploaded = api.upload_image_file(str(test_image))

    assert uploaded.name == "holiday.jpg"
    assert fake_imgur.images[uploaded.id]["size"] > 0


def test_uploading_twice_sends_identical_payloads(api, api_adapter, fake_imgur, test_image):
    """Test that the byte path produces the same payload each time."""
    api.upload_image(test_image.read_bytes())
    api.upload_image(test_image.read_bytes())

    first, second = (parse_qs(r.body)["image"] for r in api_adapter.requests)
    assert first == second


def test_update_then_get(api, fake_imgur):
    """Test that an update is visible on the next fetch."""
    uploaded = api.upload_image("aGVsbG8=", image_type="base64")

    api.update_image(uploaded.deletehash, title="Renamed", description="Changed")
    fetched = api.get_image(uploaded.id)

    assert fetched.title == "Renamed"
    assert fetched.description == "Changed"


def test_delete_then_get(api, fake_imgur):
    """Test that a deleted image can no longer be fetched."""
    uploaded = api.upload_image("aGVsbG8=", image_type="base64")

    api.delete_image(uploaded.deletehash)

    with pytest.raises(RequestError) as exc_info:
        api.get_image(uploaded.id)
    assert exc_info.value.status_code == 404

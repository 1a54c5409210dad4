"""Tests for the edit-product client controller."""

from urllib.parse import unquote

import httpx
import pytest

from src.marketplace.client import (
    EditProductController,
    ProductLoadError,
    ProductUpdateError,
)
from src.marketplace.client.edit_product import NEW_IMAGE_SELECTED, UPLOAD_TO_REPLACE
from src.marketplace.entities import Tag

STORED_URL = "https://res.cloudinary.com/demo/image/upload/v1/products/mango.png"
NEW_URL = "https://res.cloudinary.com/demo/image/upload/v2/products/mango2.png"

PRODUCT = {
    "id": "p1",
    "name": "Mango",
    "description": "Fresh",
    "tags": ["PRODUCE"],
    "image": STORED_URL,
    "vendor_id": "v1",
}


class FakeCatalogApi:
    """Minimal /products/{id} endpoint backed by a dict."""

    def __init__(self, product: dict | None = PRODUCT, put_status: int = 200):
        self.product = dict(product) if product else None
        self.put_status = put_status
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.product is None:
            return httpx.Response(404, json={"detail": "Product not found"})
        if request.method == "GET":
            return httpx.Response(200, json=self.product)
        if self.put_status != 200:
            return httpx.Response(self.put_status, json={"detail": "Not allowed to modify this product"})
        body = request.content.decode("latin-1")
        image = NEW_URL if "data:image/png;base64," in body else self.product["image"]
        self.product = {**self.product, "image": image}
        return httpx.Response(200, json=self.product)


def _controller(api: FakeCatalogApi, **kwargs) -> EditProductController:
    client = httpx.Client(base_url="http://testserver", transport=httpx.MockTransport(api))
    return EditProductController(client, "p1", **kwargs)


class TestLoad:
    def test_populates_fields(self):
        controller = _controller(FakeCatalogApi())
        controller.load()

        assert controller.name == "Mango"
        assert controller.description == "Fresh"
        assert controller.tag == Tag.PRODUCE
        assert controller.image_preview == STORED_URL
        assert controller.image_changed is False
        assert controller.status_message == UPLOAD_TO_REPLACE

    def test_missing_tags_default_to_other(self):
        controller = _controller(FakeCatalogApi({**PRODUCT, "tags": []}))
        controller.load()
        assert controller.tag == Tag.OTHER

    def test_failure(self):
        with pytest.raises(ProductLoadError):
            _controller(FakeCatalogApi(product=None)).load()


class TestSubmit:
    def test_unchanged_image_sends_stored_url(self):
        api = FakeCatalogApi()
        controller = _controller(api)
        controller.load()
        controller.name = "Ripe Mango"

        updated = controller.submit()

        put = api.requests[-1]
        body = unquote(put.content.decode("latin-1"))
        assert put.method == "PUT"
        assert put.headers["content-type"].startswith("multipart/form-data")
        assert "Ripe Mango" in body
        assert STORED_URL in body
        assert updated["image"] == STORED_URL

    def test_new_image_sends_data_uri(self):
        api = FakeCatalogApi()
        controller = _controller(api)
        controller.load()

        controller.change_image(b"\x89PNG", "image/png")
        assert controller.image_changed is True
        assert controller.status_message == NEW_IMAGE_SELECTED

        updated = controller.submit()

        assert updated["image"] == NEW_URL
        assert controller.image_preview == NEW_URL
        assert controller.image_changed is False

    def test_tag_and_csrf_header(self):
        api = FakeCatalogApi()
        controller = _controller(api, csrf_token="123:abc")
        controller.load()
        controller.set_tag("bakery")

        controller.submit()

        put = api.requests[-1]
        assert put.headers["X-CSRF-Token"] == "123:abc"
        assert 'name="tag"\r\n\r\nBAKERY' in put.content.decode("latin-1")

    def test_rejected_update(self):
        controller = _controller(FakeCatalogApi(put_status=403))
        controller.load()

        with pytest.raises(ProductUpdateError) as exc_info:
            controller.submit()

        assert exc_info.value.status_code == 403
        assert str(exc_info.value) == "Not allowed to modify this product"

    def test_submit_before_load(self):
        with pytest.raises(ProductUpdateError):
            _controller(FakeCatalogApi()).submit()

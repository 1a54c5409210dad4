"""Controller behind the vendor's edit-product page.

Loads a product, tracks edits and an optional replacement image, and submits
the result as a multipart form to ``PUT /products/{id}``.
"""

from typing import Any

import httpx

from src.marketplace.core.services.media import to_data_uri
from src.marketplace.entities.service.product import Tag

NEW_IMAGE_SELECTED = "New image selected. Save to update."
UPLOAD_TO_REPLACE = "Upload a new image to replace the current one."


class ProductLoadError(Exception):
    """The product could not be fetched."""


class ProductUpdateError(Exception):
    """The server rejected or failed the update."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class EditProductController:
    """Edit-product form state bound to one product.

    Args:
        client: HTTP client with ``base_url`` set and the session cookie
            in its cookie jar
        product_id: Product being edited
        csrf_token: Token from ``GET /auth/me``, sent on submit when given
    """

    def __init__(
        self,
        client: httpx.Client,
        product_id: str,
        csrf_token: str | None = None,
        csrf_header_name: str = "X-CSRF-Token",
    ) -> None:
        self.client = client
        self.product_id = product_id
        self.csrf_token = csrf_token
        self.csrf_header_name = csrf_header_name

        self.name = ""
        self.description = ""
        self.tag = Tag.OTHER
        self.image_preview: str | None = None
        self.image_changed = False
        self.loaded = False

    @property
    def _path(self) -> str:
        return f"/products/{self.product_id}"

    def load(self) -> dict[str, Any]:
        """Fetch the product and populate the form fields."""
        try:
            response = self.client.get(self._path)
        except httpx.HTTPError as e:
            raise ProductLoadError("Failed to fetch product") from e
        if response.is_error:
            raise ProductLoadError("Failed to fetch product")

        product = response.json()
        self.name = product["name"]
        self.description = product["description"]
        tags = product.get("tags") or []
        self.tag = Tag(tags[0]) if tags else Tag.OTHER
        self.image_preview = product["image"]
        self.image_changed = False
        self.loaded = True
        return product

    def change_image(self, content: bytes, content_type: str) -> None:
        """Select a replacement image; it is uploaded on submit."""
        self.image_preview = to_data_uri(content, content_type)
        self.image_changed = True

    def set_tag(self, tag: Tag | str) -> None:
        self.tag = Tag(tag.upper()) if isinstance(tag, str) else tag

    @property
    def status_message(self) -> str:
        return NEW_IMAGE_SELECTED if self.image_changed else UPLOAD_TO_REPLACE

    def form_fields(self) -> dict[str, str]:
        fields = {
            "name": self.name,
            "description": self.description,
            "tag": self.tag.value,
        }
        if self.image_preview:
            fields["image"] = self.image_preview
        return fields

    def submit(self) -> dict[str, Any]:
        """Send the edited product and return the stored record.

        The image field carries the data URI when a new image was chosen,
        otherwise the current URL, which the server keeps as is.
        """
        if not self.loaded:
            raise ProductUpdateError("Product has not been loaded")

        headers = {}
        if self.csrf_token:
            headers[self.csrf_header_name] = self.csrf_token

        # multipart, the same encoding a browser form submission uses
        files = {key: (None, value) for key, value in self.form_fields().items()}
        try:
            response = self.client.put(self._path, files=files, headers=headers)
        except httpx.HTTPError as e:
            raise ProductUpdateError("Failed to update product") from e

        if response.is_error:
            raise ProductUpdateError(
                _error_detail(response) or "Failed to update product",
                status_code=response.status_code,
            )

        updated = response.json()
        self.image_preview = updated["image"]
        self.image_changed = False
        return updated


def _error_detail(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    detail = body.get("detail") if isinstance(body, dict) else None
    return detail if isinstance(detail, str) else None

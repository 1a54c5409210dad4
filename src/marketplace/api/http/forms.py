"""Product form parsing and validation."""

from pydantic import BaseModel
from starlette.datastructures import FormData, UploadFile

from src.marketplace.core.exceptions import ValidationFailed
from src.marketplace.core.services.media import to_data_uri
from src.marketplace.entities.service.product import Tag

IMAGE_REQUIRED = "Image is required"
NAME_AND_DESCRIPTION_REQUIRED = "Name and description are required"


class ProductForm(BaseModel):
    """Validated fields of a product create/edit submission.

    ``image`` is either a data URI (new upload) or, on edits, the URL the
    product already has. ``tag`` is None when the client sent none.
    """

    name: str
    description: str
    tag: Tag | None = None
    image: str | None = None

    @classmethod
    async def from_form(cls, form: FormData, require_image: bool = True) -> "ProductForm":
        """Extract and check the submitted fields.

        The image is checked before the text fields so the caller sees
        "Image is required" for a submission missing both.

        Raises:
            ValidationFailed: on a missing image, empty name or description,
                or an unknown tag
        """
        image = await _read_image(form.get("image"))
        if require_image and not image:
            raise ValidationFailed(IMAGE_REQUIRED)

        name = _text(form.get("name"))
        description = _text(form.get("description"))
        if not name or not description:
            raise ValidationFailed(NAME_AND_DESCRIPTION_REQUIRED)

        raw_tag = _text(form.get("tag"))
        tag = None
        if raw_tag:
            try:
                tag = Tag(raw_tag.upper())
            except ValueError:
                raise ValidationFailed(f"Invalid tag: {raw_tag}") from None

        return cls(name=name, description=description, tag=tag, image=image or None)


def _text(value: object) -> str:
    if isinstance(value, str):
        return value.strip()
    return ""


async def _read_image(value: object) -> str:
    """Normalise the image part to a string: data URIs and URLs pass through,
    uploaded files are encoded as data URIs."""
    if isinstance(value, UploadFile):
        content = await value.read()
        if not content:
            return ""
        return to_data_uri(content, value.content_type)
    return _text(value)

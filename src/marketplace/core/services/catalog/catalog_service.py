"""Catalog use cases: list, read, create and update products."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from loguru import logger
from sqlmodel import Session
from starlette.concurrency import run_in_threadpool

from src.marketplace.core.exceptions import (
    EntityNotFound,
    Forbidden,
    UpstreamFailure,
    ValidationFailed,
)
from src.marketplace.core.services.media import MediaUploadService, is_data_uri
from src.marketplace.entities.core.user import User
from src.marketplace.entities.service.product import (
    Product,
    ProductRepository,
    ProductWithVendor,
    Tag,
)
from src.marketplace.entities.service.vendor import Vendor, VendorRepository

if TYPE_CHECKING:
    from src.marketplace.api.http.forms import ProductForm

VENDOR_NOT_FOUND = "Vendor account not found"
PRODUCT_NOT_FOUND = "Product not found"


class CatalogService:
    """Product operations for one request's database session.

    Writes upload the image first and persist second. When persisting fails
    after a successful upload, the uploaded asset is destroyed again. The
    async methods run their database work in the threadpool.
    """

    def __init__(self, db: Session, media: MediaUploadService) -> None:
        self._db = db
        self._media = media
        self._products = ProductRepository(db)
        self._vendors = VendorRepository(db)

    def list_products(self, market_id: str | None = None) -> list[ProductWithVendor]:
        return self._products.list_all(market_id)

    def get_product(self, product_id: str) -> ProductWithVendor:
        product = self._products.get(product_id)
        if product is None:
            raise EntityNotFound(PRODUCT_NOT_FOUND)
        return product

    def resolve_vendor(self, user: User) -> Vendor:
        """Find the vendor operated by ``user`` (first match on phone)."""
        vendor = None
        if user.phone:
            vendor = self._vendors.first_by_user_phone(user.phone)
        if vendor is None:
            raise EntityNotFound(VENDOR_NOT_FOUND)
        return vendor

    async def create_product(self, user: User, form: ProductForm) -> Product:
        vendor = await run_in_threadpool(self.resolve_vendor, user)

        if not form.image or not is_data_uri(form.image):
            raise ValidationFailed("Image must be an uploaded image")
        image_url = await self._media.upload(form.image)

        def save() -> Product:
            return self._products.create(
                Product(
                    name=form.name,
                    description=form.description,
                    tags=[form.tag or Tag.OTHER],
                    image=image_url,
                    vendor_id=vendor.id,
                )
            )

        created = await self._persist(save, image_url)
        logger.info("Vendor {} created product {}", vendor.id, created.id)
        return created

    async def update_product(
        self, user: User, product_id: str, form: ProductForm
    ) -> Product:
        existing = await run_in_threadpool(self.get_product, product_id)
        vendor = await run_in_threadpool(self.resolve_vendor, user)
        if existing.vendor_id != vendor.id:
            raise Forbidden("Not allowed to modify this product")

        image_url = existing.image
        uploaded = None
        if form.image and form.image != existing.image:
            if not is_data_uri(form.image):
                raise ValidationFailed("Image must be an uploaded image")
            image_url = uploaded = await self._media.upload(form.image)

        def save() -> Product:
            return self._products.update(
                Product(
                    **existing.model_dump(
                        exclude={"vendor", "name", "description", "tags", "image"}
                    ),
                    name=form.name,
                    description=form.description,
                    tags=[form.tag or Tag.OTHER],
                    image=image_url,
                )
            )

        updated = await self._persist(save, uploaded)
        logger.info("Vendor {} updated product {}", vendor.id, updated.id)
        return updated

    def _commit(self, save: Callable[[], Product]) -> Product:
        result = save()
        self._db.commit()
        return result

    async def _persist(
        self, save: Callable[[], Product], uploaded_url: str | None
    ) -> Product:
        """Build and store the product off the event loop.

        Any failure, including an invalid record, rolls back and removes the
        image uploaded for this request.
        """
        try:
            return await run_in_threadpool(self._commit, save)
        except Exception:
            await run_in_threadpool(self._db.rollback)
            if uploaded_url:
                await self._discard_upload(uploaded_url)
            raise

    async def _discard_upload(self, image_url: str) -> None:
        try:
            removed = await self._media.destroy(image_url)
        except UpstreamFailure:
            logger.exception("Could not remove orphaned upload {}", image_url)
            return
        if not removed:
            logger.warning("Media host did not confirm removal of {}", image_url)

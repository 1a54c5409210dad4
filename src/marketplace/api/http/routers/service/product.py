"""Product catalog API router."""

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from loguru import logger

from src.marketplace.api.http.deps import (
    enforce_origin,
    get_catalog_service,
    get_session_user,
    require_csrf,
)
from src.marketplace.api.http.forms import ProductForm
from src.marketplace.core.exceptions import CatalogError
from src.marketplace.core.services import CatalogService
from src.marketplace.entities.core.user import User
from src.marketplace.entities.service.product import Product, ProductWithVendor

router = APIRouter(prefix="/products", tags=["products"])


def _http_error(exc: Exception, generic_message: str, action: str) -> HTTPException:
    """Translate a failure into the HTTP error the caller sees.

    Client errors keep their message; upstream and unexpected failures are
    logged in full and reported with ``generic_message`` only.
    """
    if isinstance(exc, CatalogError) and exc.status_code < 500:
        return HTTPException(status_code=exc.status_code, detail=exc.message)

    logger.opt(exception=exc).error("Error {}: {}", action, exc)
    return HTTPException(status_code=500, detail=generic_message)


@router.get("", response_model=list[ProductWithVendor])
def list_products(
    user: User = Depends(get_session_user),
    market_id: str | None = Query(default=None, alias="marketId"),
    catalog: CatalogService = Depends(get_catalog_service),
) -> list[ProductWithVendor]:
    """List products with vendor and market, optionally for one market."""
    try:
        return catalog.list_products(market_id)
    except Exception as exc:
        raise _http_error(exc, "Internal error", "fetching products") from None


@router.get("/{product_id}", response_model=ProductWithVendor)
def get_product(
    product_id: str,
    user: User = Depends(get_session_user),
    catalog: CatalogService = Depends(get_catalog_service),
) -> ProductWithVendor:
    try:
        return catalog.get_product(product_id)
    except Exception as exc:
        raise _http_error(exc, "Internal error", "fetching product") from None


@router.post(
    "",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
    dependencies=[
        Depends(get_session_user),
        Depends(enforce_origin),
        Depends(require_csrf),
    ],
)
async def create_product(
    request: Request,
    user: User = Depends(get_session_user),
    catalog: CatalogService = Depends(get_catalog_service),
) -> Product:
    """Create a product for the caller's vendor from a multipart form.

    Form fields: ``name``, ``description``, ``tag`` (optional, defaults to
    OTHER) and ``image`` (data URI or file part).
    """
    try:
        form = await ProductForm.from_form(await request.form())
        return await catalog.create_product(user, form)
    except Exception as exc:
        raise _http_error(exc, "Failed to create product", "creating product") from None


@router.put(
    "/{product_id}",
    response_model=Product,
    dependencies=[
        Depends(get_session_user),
        Depends(enforce_origin),
        Depends(require_csrf),
    ],
)
async def update_product(
    product_id: str,
    request: Request,
    user: User = Depends(get_session_user),
    catalog: CatalogService = Depends(get_catalog_service),
) -> Product:
    """Replace a product's editable fields.

    The image is re-uploaded only when a new data URI is submitted; sending
    the current image URL, or no image, keeps the stored one.
    """
    try:
        form = await ProductForm.from_form(await request.form(), require_image=False)
        return await catalog.update_product(user, product_id, form)
    except Exception as exc:
        raise _http_error(exc, "Failed to update product", "updating product") from None

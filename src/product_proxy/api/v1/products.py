"""Product API endpoints proxied to the upstream object store."""

import logging

from fastapi import APIRouter, HTTPException, Query, Request, Response, status
from fastapi.exceptions import RequestValidationError

from product_proxy.api.deps import Gateway
from product_proxy.core.exceptions import ProductProxyError
from product_proxy.schemas.product import Product, ProductCreate, ProductPatch, ProductUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


def _missing_id(location: str, message: str) -> RequestValidationError:
    return RequestValidationError([{"loc": (location, "id"), "msg": message, "type": "missing"}])


def _require_id(product_id: str) -> None:
    if not product_id.strip():
        raise _missing_id("path", "Id must be provided.")


@router.get("", response_model=list[Product])
async def list_products(
    gateway: Gateway,
    name: str | None = Query(None, description="Case-insensitive name substring"),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, alias="pageSize"),
):
    """Get products, optionally filtered by name, one page at a time.

    The whole upstream collection is fetched, then filtered and paginated
    here because the upstream store supports neither.
    """
    try:
        return await gateway.get_all(name=name, page=page, page_size=page_size)
    except ProductProxyError:
        logger.exception(f"Error fetching product list (name={name!r}, page={page}, pageSize={page_size})")
        raise


@router.get("/batch", response_model=list[Product])
async def get_products_by_ids(
    gateway: Gateway,
    ids: list[str] = Query([], alias="id", description="Repeat for each id: ?id=1&id=2"),
):
    """Get several products by id. Unknown ids are silently omitted."""
    if not ids:
        raise _missing_id("query", "At least one id must be provided.")

    try:
        return await gateway.get_by_ids(ids)
    except ProductProxyError:
        logger.exception(f"Error fetching products for ids: {', '.join(ids)}")
        raise


@router.get("/{product_id}", response_model=Product, name="get_product")
async def get_product(product_id: str, gateway: Gateway):
    """Get product by ID."""
    _require_id(product_id)

    try:
        product = await gateway.get_by_id(product_id)
    except ProductProxyError:
        logger.exception(f"Error fetching product with id: {product_id}")
        raise

    if product is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )
    return product


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
async def create_product(
    product_data: ProductCreate,
    request: Request,
    response: Response,
    gateway: Gateway,
):
    """Create a new product.

    Responds with a Location header pointing at the new product.
    """
    try:
        product = await gateway.create(product_data)
    except ProductProxyError:
        logger.exception("Error creating product.")
        raise

    response.headers["Location"] = str(request.url_for("get_product", product_id=product.id))
    return product


@router.put("/{product_id}", response_model=Product)
async def replace_product(product_id: str, product_data: ProductUpdate, gateway: Gateway):
    """Replace a product's name and data."""
    _require_id(product_id)

    try:
        return await gateway.update(product_id, product_data)
    except ProductProxyError:
        logger.exception(f"Error updating product with id: {product_id}")
        raise


@router.patch("/{product_id}", response_model=Product)
async def patch_product(product_id: str, product_data: ProductPatch, gateway: Gateway):
    """Update the supplied fields of a product.

    A supplied ``data`` object replaces the stored one entirely.
    """
    _require_id(product_id)

    try:
        return await gateway.patch(product_id, product_data)
    except ProductProxyError:
        logger.exception(f"Error patching product with id: {product_id}")
        raise


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(product_id: str, gateway: Gateway):
    """Delete a product. 404 when upstream did not report success."""
    _require_id(product_id)

    try:
        deleted = await gateway.delete(product_id)
    except ProductProxyError:
        logger.exception(f"Error deleting product with id: {product_id}")
        raise

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""
Product Routes
==============

CRUD and search over the catalog. Reads go through the cache (see
CatalogService); writes go to the catalog and invalidate.

    GET    /products               list
    GET    /products/search?q=     search
    POST   /products/cleanup       remove incomplete records
    GET    /products/{id}          read one (uncached)
    POST   /products               create or update
    PUT    /products/{id}          update by path id
    DELETE /products/{id}?rev=     delete

Domain errors are mapped to HTTP statuses by the registered exception
handler, so handlers here contain no try/except.
"""

from fastapi import APIRouter, Query, status

from product_catalog.application.api.dependencies import CatalogServiceDep
from product_catalog.application.api.models.products import (
    CleanupResponse,
    ProductWriteRequest,
    SaveResponse,
)
from product_catalog.models.product import Product

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", response_model=list[Product])
async def list_products(service: CatalogServiceDep):
    """Complete products sorted by brand."""
    return await service.list_products()


@router.get("/search", response_model=list[Product])
async def search_products(
    service: CatalogServiceDep,
    q: str = Query(default="", max_length=200, description="Substring of brand, name or category"),
):
    """Case-insensitive search; a blank term lists everything."""
    return await service.search_products(q)


@router.post("/cleanup", response_model=CleanupResponse)
async def cleanup_empty_products(service: CatalogServiceDep):
    removed = await service.cleanup_empty_products()
    return CleanupResponse(removed=removed)


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str, service: CatalogServiceDep):
    return await service.get_product(product_id)


@router.post("", response_model=SaveResponse, status_code=status.HTTP_201_CREATED)
async def save_product(body: ProductWriteRequest, service: CatalogServiceDep):
    """
    Create a product, or update it when ``_id`` names an existing one.
    """
    result = await service.save_product(body.to_product())
    return SaveResponse(id=result.id, rev=result.rev)


@router.put("/{product_id}", response_model=SaveResponse)
async def update_product(product_id: str, body: ProductWriteRequest, service: CatalogServiceDep):
    result = await service.save_product(body.to_product(product_id))
    return SaveResponse(id=result.id, rev=result.rev)


@router.delete("/{product_id}", response_model=SaveResponse)
async def delete_product(
    product_id: str,
    service: CatalogServiceDep,
    rev: str = Query(..., min_length=1, description="Current revision of the product"),
):
    result = await service.delete_product(product_id, rev)
    return SaveResponse(id=result.id, rev=result.rev)

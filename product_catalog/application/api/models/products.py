"""
Product API Models
==================

Request and response bodies of the product endpoints. Product records
themselves are returned as ``Product`` (serialized with the ``_id`` /
``_rev`` aliases).
"""

from pydantic import BaseModel, ConfigDict, Field

from product_catalog.models.product import Product


class ProductWriteRequest(BaseModel):
    """
    Body of POST /products and PUT /products/{id}.

    ``_id`` is optional on POST (generated when absent) and ignored on PUT,
    where the path id wins. A client-supplied ``_rev`` is accepted but the
    current revision is always taken over (last write wins).
    """

    id: str | None = Field(default=None, alias="_id", description="Existing product id to update")
    rev: str | None = Field(default=None, alias="_rev", description="Revision known to the client")
    brand: str = Field(..., min_length=1, max_length=200, description="Brand name")
    product_name: str = Field(..., min_length=1, max_length=200, description="Product name")
    category: str | None = Field(default=None, max_length=200, description="Category")
    price_usd: float = Field(default=0, ge=0, description="Price in USD")
    rating: float = Field(default=0, ge=0, description="Rating")

    model_config = ConfigDict(populate_by_name=True)

    def to_product(self, product_id: str | None = None) -> Product:
        return Product(
            id=product_id or self.id,
            rev=self.rev,
            brand=self.brand,
            product_name=self.product_name,
            category=self.category,
            price_usd=self.price_usd,
            rating=self.rating,
        )


class SaveResponse(BaseModel):
    """Id and revision after a write."""

    id: str = Field(..., description="Product id")
    rev: str = Field(..., description="New revision token")


class CleanupResponse(BaseModel):
    removed: int = Field(..., ge=0, description="Incomplete records removed")

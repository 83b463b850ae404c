"""
Product Model

Catalog record as stored in the document store. ``_id`` and ``_rev`` keep
their document-store names on the wire (aliases) and are exposed as
``id`` / ``rev`` in Python.
"""

import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from product_catalog.core.config.constants import DESIGN_DOC_PREFIX, PRODUCT_ID_PREFIX


def new_product_id() -> str:
    """Generate a ``product:<uuid4>`` id."""
    return f"{PRODUCT_ID_PREFIX}{uuid.uuid4()}"


class Product(BaseModel):
    """
    A product record.

    A product is *complete* when brand and product_name are both non-blank;
    incomplete records are hidden from listings and removed by cleanup.
    """

    id: str | None = Field(default=None, alias="_id", description="Document id (product:<uuid>)")
    rev: str | None = Field(default=None, alias="_rev", description="Revision token")
    brand: str | None = Field(default=None, description="Brand name")
    product_name: str | None = Field(default=None, description="Product name")
    category: str | None = Field(default=None, description="Category")
    price_usd: float = Field(default=0, description="Price in USD")
    rating: float = Field(default=0, description="Rating")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @property
    def is_complete(self) -> bool:
        return bool((self.brand or "").strip() and (self.product_name or "").strip())

    @property
    def is_internal(self) -> bool:
        """Internal documents (``_design/...``) are never listed."""
        return bool(self.id and self.id.startswith(DESIGN_DOC_PREFIX))

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match over brand, name and category."""
        needle = term.lower()
        return any(
            needle in (field or "").lower()
            for field in (self.brand, self.product_name, self.category)
        )

    def to_record(self) -> dict[str, Any]:
        """Document-store representation (``_id``/``_rev`` keys, no unset ids)."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Product":
        return cls.model_validate(record)

"""
Unit Tests for Core Exceptions

Tests the exception hierarchy and structured error helpers.
"""

import pytest

from product_catalog.core.exceptions import (
    CacheConnectionError,
    CacheError,
    CacheOperationError,
    CatalogBaseError,
    CatalogError,
    InvalidProductError,
    ProductNotFoundError,
    RevisionConflictError,
)


@pytest.mark.unit
class TestCatalogBaseError:
    """Test the base exception class."""

    def test_base_error_creation(self):
        error = CatalogBaseError("Test message")
        assert str(error) == "Test message"
        assert error.details == {}

    def test_details_are_copied(self):
        """Test that the caller's dict is not mutated by with_context."""
        details = {"id": "product:1"}
        error = CatalogBaseError("Test", details=details).with_context(rev="1-a")

        assert error.details == {"id": "product:1", "rev": "1-a"}
        assert details == {"id": "product:1"}

    def test_to_dict(self):
        error = ProductNotFoundError("Product not found", details={"id": "product:9"})

        assert error.to_dict() == {
            "error_type": "ProductNotFoundError",
            "message": "Product not found",
            "details": {"id": "product:9"},
        }

    def test_from_exception_wraps_original(self):
        original = ConnectionRefusedError("refused")

        error = CacheConnectionError.from_exception(original, address="redis://localhost:6379")

        assert isinstance(error, CacheConnectionError)
        assert error.message == "refused"
        assert error.details["original_error"] == "ConnectionRefusedError"
        assert error.details["address"] == "redis://localhost:6379"

    def test_repr_includes_details(self):
        error = CatalogBaseError("boom", details={"k": 1})
        assert repr(error) == "CatalogBaseError(message='boom', details={'k': 1})"


@pytest.mark.unit
class TestHierarchy:
    """Test that the themed exceptions sit under the right bases."""

    @pytest.mark.parametrize("cls", [CacheConnectionError, CacheOperationError])
    def test_cache_errors(self, cls):
        assert issubclass(cls, CacheError)
        assert issubclass(cls, CatalogBaseError)

    @pytest.mark.parametrize("cls", [ProductNotFoundError, RevisionConflictError, InvalidProductError])
    def test_catalog_errors(self, cls):
        assert issubclass(cls, CatalogError)
        assert not issubclass(cls, CacheError)

"""
Product Catalog Service

Product catalog CRUD over a document store, accelerated by a dual-backend
(Redis or local on-disk) cache with TTL-based invalidation.
"""

__version__ = "1.0.0"

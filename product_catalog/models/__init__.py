"""Data models module."""

from product_catalog.models.product import ImageUpload, Product

__all__ = ["ImageUpload", "Product"]

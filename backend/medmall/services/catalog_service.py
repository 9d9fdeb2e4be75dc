"""
Catalog services: product categories and product specs.

Categories are listed a page at a time by sort_order; specs are listed per
product in creation order.
"""

from medmall.models.catalog import ProductCategory, ProductSpec
from medmall.services.base import ResourceService


class ProductCategoryService(ResourceService[ProductCategory]):
    model = ProductCategory
    resource_name = "product category"
    update_fields = ("name", "code", "sort_order", "is_enabled")

    def ordering(self):
        # created_at/id only break ties so pages never overlap
        return (ProductCategory.sort_order, ProductCategory.created_at, ProductCategory.id)


class ProductSpecService(ResourceService[ProductSpec]):
    model = ProductSpec
    resource_name = "product spec"
    update_fields = ("spec_name", "spec_code", "price", "stock", "weight", "is_default")

    def ordering(self):
        return (ProductSpec.created_at,)


product_category_service = ProductCategoryService()
product_spec_service = ProductSpecService()

# services/product_service.py
import logging
from typing import List, Optional, Tuple

from models.log import AuditAction, EntityType
from models.product import Category, Product
from repositories import products as product_repo
from services.base import BaseService
from utils.audit import write_log
from utils.errors import BadRequestError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class ProductService(BaseService):
    """Product catalogue and categories."""

    def _resolve_category(self, category_id: Optional[int]) -> Optional[Category]:
        if category_id is None or category_id <= 0:
            return None
        category = product_repo.get_category(self.db, category_id)
        if not category:
            raise NotFoundError(f"Category with ID {category_id} not found")
        return category

    def stage_product(
        self,
        sku: Optional[str],
        name: Optional[str] = None,
        description: Optional[str] = None,
        category_id: Optional[int] = None,
    ) -> Tuple[Product, bool]:
        """Find the product by SKU or add a new one to the session.

        Does not commit. Returns ``(product, created)``; a created product is
        flushed so its id is available to the caller's transaction.
        """
        if _blank(sku):
            raise BadRequestError("Product SKU cannot be null or empty")
        sku = sku.strip()

        existing = product_repo.get_by_sku(self.db, sku)
        if existing:
            return existing, False

        if _blank(name):
            raise BadRequestError(
                f"Product name is required when creating a new product with SKU: {sku}"
            )

        product = Product(
            sku=sku,
            name=name.strip(),
            description=description,
            is_active=True,
            category=self._resolve_category(category_id),
        )
        self.db.add(product)
        self._flush()
        return product, True

    def audit_created(self, product: Product):
        write_log(
            self.db, EntityType.PRODUCT, product.id, AuditAction.CREATE,
            f"Created new product: {product.name} (SKU: {product.sku})",
        )

    def get_or_create_product(self, sku, name=None, description=None, category_id=None) -> Product:
        product, created = self.stage_product(sku, name, description, category_id)
        if created:
            self._commit()
            logger.info("Created product %s (%s)", product.id, product.sku)
            self.audit_created(product)
        return product

    def create_product(self, sku, name, description=None, category_id=None) -> Product:
        if not _blank(sku) and product_repo.get_by_sku(self.db, sku.strip()):
            raise ConflictError(f"Product with SKU '{sku.strip()}' already exists")
        return self.get_or_create_product(sku, name, description, category_id)

    def get_product(self, product_id: int) -> Product:
        product = product_repo.get_product(self.db, product_id)
        if not product:
            raise NotFoundError(f"Product with ID {product_id} not found")
        return product

    def get_by_sku(self, sku: str) -> Product:
        product = None if _blank(sku) else product_repo.get_by_sku(self.db, sku.strip())
        if not product:
            raise NotFoundError(f"Product with SKU '{sku}' not found")
        return product

    def search_products(self, name=None, sku=None, category_id=None, is_active=None, sort_by="id", order="asc"):
        return product_repo.search_products(self.db, name, sku, category_id, is_active, sort_by, order)

    def update_product(
        self,
        product_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        is_active: Optional[bool] = None,
        category_id: Optional[int] = None,
    ) -> Product:
        product = self.get_product(product_id)
        use_category = category_id is not None and category_id > 0
        if _blank(name) and description is None and is_active is None and not use_category:
            raise BadRequestError("No fields provided to update")
        category = self._resolve_category(category_id) if use_category else None

        if not _blank(name):
            product.name = name.strip()
        if description is not None:
            product.description = description
        if is_active is not None:
            product.is_active = is_active
        if use_category:
            product.category = category

        self._commit()
        self.db.refresh(product)
        write_log(
            self.db, EntityType.PRODUCT, product.id, AuditAction.UPDATE,
            f"Updated product: {product.name} (SKU: {product.sku})",
        )
        return product

    def delete_product(self, product_id: int):
        product = self.get_product(product_id)
        if product_repo.has_inventory(self.db, product_id):
            raise ConflictError(
                f"Cannot delete product '{product.name}' because inventory batches reference it"
            )
        if product_repo.has_transfers(self.db, product_id):
            raise ConflictError(
                f"Cannot delete product '{product.name}' because inventory transfers reference it"
            )
        if product_repo.has_transactions(self.db, product_id):
            raise ConflictError(
                f"Cannot delete product '{product.name}' because its inventory movement history references it"
            )

        name, sku = product.name, product.sku
        self.db.delete(product)
        self._commit()
        logger.info("Deleted product %s (%s)", product_id, sku)

        write_log(
            self.db, EntityType.PRODUCT, product_id, AuditAction.DELETE,
            f"Deleted product: {name} (SKU: {sku})",
        )

    # --- categories ---

    def create_category(self, name: Optional[str], description: Optional[str] = None) -> Category:
        if _blank(name):
            raise BadRequestError("Category name cannot be null or empty")
        name = name.strip()
        if product_repo.category_exists_by_name(self.db, name):
            raise ConflictError(f"Category with name '{name}' already exists")

        category = Category(name=name, description=description)
        self.db.add(category)
        self._commit()
        self.db.refresh(category)
        return category

    def list_categories(self) -> List[Category]:
        return product_repo.list_categories(self.db)

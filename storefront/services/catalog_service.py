# storefront/services/catalog_service.py
import re

from sqlalchemy.orm import Session

from storefront.data.models.category import CategoryModel
from storefront.data.models.product import ProductModel
from storefront.domain.errors import NotFoundError, ValidationError
from storefront.domain.schemas import CategoryCreate, CategoryUpdate, ProductCreate, ProductUpdate
from storefront.repos.catalog_repo import CatalogRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def slugify(text: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    return slug or "category"


class CatalogService:
    """
    Kategorie i produkty. Odczyt publiczny, zapis tylko admin (pilnuje router).
    """

    def __init__(self, db: Session):
        self.repo = CatalogRepo(db)

    # ---------- categories ----------
    def list_categories(self) -> list[CategoryModel]:
        return self.repo.list_categories()

    def get_category(self, category_id: int) -> CategoryModel:
        category = self.repo.get_category(category_id)
        if not category:
            raise NotFoundError("Category not found")
        return category

    def get_category_by_slug(self, slug: str) -> CategoryModel:
        category = self.repo.get_category_by_slug(slug)
        if not category:
            raise NotFoundError("Category not found")
        return category

    def _check_unique(self, name: str | None, slug: str | None, current_id: int | None = None):
        if name:
            other = self.repo.get_category_by_name(name)
            if other and other.id != current_id:
                raise ValidationError("Category name already exists")
        if slug:
            other = self.repo.get_category_by_slug(slug)
            if other and other.id != current_id:
                raise ValidationError("Category slug already exists")

    def create_category(self, payload: CategoryCreate) -> CategoryModel:
        slug = slugify(payload.slug or payload.name)
        self._check_unique(payload.name, slug)
        category = self.repo.save(
            CategoryModel(name=payload.name, slug=slug, description=payload.description)
        )
        logger.info(f"Category {category.id} '{category.slug}' created")
        return category

    def update_category(self, category_id: int, payload: CategoryUpdate) -> CategoryModel:
        category = self.get_category(category_id)
        changes = payload.model_dump(exclude_unset=True)
        if changes.get("slug"):
            changes["slug"] = slugify(changes["slug"])
        self._check_unique(changes.get("name"), changes.get("slug"), current_id=category.id)
        for field, value in changes.items():
            if value is None and field != "description":
                continue
            setattr(category, field, value)
        return self.repo.save(category)

    def delete_category(self, category_id: int) -> None:
        category = self.get_category(category_id)
        if category.products:
            raise ValidationError("Category still has products")
        self.repo.delete(category)
        logger.info(f"Category {category_id} deleted")

    # ---------- products ----------
    def list_products(self) -> list[ProductModel]:
        return self.repo.list_products()

    def list_products_by_category(self, category_id: int) -> list[ProductModel]:
        return self.repo.list_products(category_id=category_id)

    def list_products_by_category_slug(self, slug: str) -> list[ProductModel]:
        category = self.repo.get_category_by_slug(slug)
        if not category:
            return []
        return self.repo.list_products(category_id=category.id)

    def get_product(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    def create_product(self, payload: ProductCreate) -> ProductModel:
        self.get_category(payload.category_id)
        if self.repo.get_product_by_sku(payload.sku):
            raise ValidationError("SKU already exists")
        product = self.repo.save(ProductModel(**payload.model_dump()))
        logger.info(f"Product {product.id} ({product.sku}) created")
        return self.get_product(product.id)

    def update_product(self, product_id: int, payload: ProductUpdate) -> ProductModel:
        product = self.get_product(product_id)
        changes = payload.model_dump(exclude_unset=True)
        if changes.get("category_id"):
            self.get_category(changes["category_id"])
        if changes.get("sku"):
            other = self.repo.get_product_by_sku(changes["sku"])
            if other and other.id != product.id:
                raise ValidationError("SKU already exists")
        for field, value in changes.items():
            if value is None and field != "description":
                continue
            setattr(product, field, value)
        self.repo.save(product)
        return self.get_product(product.id)

    def delete_product(self, product_id: int) -> None:
        product = self.get_product(product_id)
        self.repo.delete(product)
        logger.info(f"Product {product_id} deleted")

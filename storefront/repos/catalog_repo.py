# storefront/repos/catalog_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from storefront.data.models.category import CategoryModel
from storefront.data.models.product import ProductModel


class CatalogRepo:
    def __init__(self, db: Session):
        self.db = db

    # categories
    def list_categories(self) -> list[CategoryModel]:
        return list(self.db.execute(select(CategoryModel).order_by(CategoryModel.name)).scalars())

    def get_category(self, category_id: int) -> CategoryModel | None:
        return self.db.get(CategoryModel, category_id)

    def get_category_by_slug(self, slug: str) -> CategoryModel | None:
        return self.db.execute(
            select(CategoryModel).where(CategoryModel.slug == slug)
        ).scalar_one_or_none()

    def get_category_by_name(self, name: str) -> CategoryModel | None:
        return self.db.execute(
            select(CategoryModel).where(CategoryModel.name == name)
        ).scalar_one_or_none()

    # products
    def list_products(self, category_id: int | None = None) -> list[ProductModel]:
        stmt = select(ProductModel).options(joinedload(ProductModel.category)).order_by(ProductModel.id)
        if category_id is not None:
            stmt = stmt.where(ProductModel.category_id == category_id)
        return list(self.db.execute(stmt).scalars())

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel)
            .options(joinedload(ProductModel.category))
            .where(ProductModel.id == product_id)
        ).scalar_one_or_none()

    def get_product_by_sku(self, sku: str) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel).where(ProductModel.sku == sku)
        ).scalar_one_or_none()

    # wspolne
    def save(self, entity):
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def delete(self, entity) -> None:
        self.db.delete(entity)
        self.db.commit()

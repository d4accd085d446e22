# storefront/services/watchlist_service.py
from sqlalchemy.orm import Session

from storefront.data.models.watchlist_item import WatchlistItemModel
from storefront.domain.errors import ConflictError, NotFoundError, PermissionDeniedError
from storefront.domain.schemas import UserRead
from storefront.repos.catalog_repo import CatalogRepo
from storefront.repos.watchlist_repo import WatchlistRepo


class WatchlistService:
    def __init__(self, db: Session):
        self.repo = WatchlistRepo(db)
        self.catalog = CatalogRepo(db)

    def list_items(self, user: UserRead) -> list[WatchlistItemModel]:
        return self.repo.get_items(user.id)

    def add(self, user: UserRead, product_id: int) -> WatchlistItemModel:
        if not self.catalog.get_product(product_id):
            raise NotFoundError("Product not found")
        if self.repo.exists(user.id, product_id):
            raise ConflictError("Product already in watchlist")
        return self.repo.add(WatchlistItemModel(user_id=user.id, product_id=product_id))

    def remove(self, user: UserRead, item_id: int) -> None:
        item = self.repo.get_item(item_id)
        if not item:
            raise NotFoundError("Watchlist item not found")
        if item.user_id != user.id:
            raise PermissionDeniedError("Forbidden: Not your watchlist item")
        self.repo.delete(item)

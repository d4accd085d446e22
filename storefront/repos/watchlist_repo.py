# storefront/repos/watchlist_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from storefront.data.models.product import ProductModel
from storefront.data.models.watchlist_item import WatchlistItemModel


class WatchlistRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_items(self, user_id: int) -> list[WatchlistItemModel]:
        return list(
            self.db.execute(
                select(WatchlistItemModel)
                .options(joinedload(WatchlistItemModel.product).joinedload(ProductModel.category))
                .where(WatchlistItemModel.user_id == user_id)
                .order_by(WatchlistItemModel.id)
            ).scalars()
        )

    def get_item(self, item_id: int) -> WatchlistItemModel | None:
        return self.db.get(WatchlistItemModel, item_id)

    def exists(self, user_id: int, product_id: int) -> bool:
        return self.db.execute(
            select(WatchlistItemModel.id).where(
                WatchlistItemModel.user_id == user_id,
                WatchlistItemModel.product_id == product_id,
            )
        ).first() is not None

    def add(self, item: WatchlistItemModel) -> WatchlistItemModel:
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item

    def delete(self, item: WatchlistItemModel) -> None:
        self.db.delete(item)
        self.db.commit()

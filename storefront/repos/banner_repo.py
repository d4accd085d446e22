# storefront/repos/banner_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.banner import BannerModel


class BannerRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_banners(self, banner_type: str | None = None) -> list[BannerModel]:
        stmt = select(BannerModel).order_by(BannerModel.position, BannerModel.id)
        if banner_type:
            stmt = stmt.where(BannerModel.type == banner_type)
        return list(self.db.execute(stmt).scalars())

    def get_banner(self, banner_id: int) -> BannerModel | None:
        return self.db.get(BannerModel, banner_id)

    def save(self, banner: BannerModel) -> BannerModel:
        self.db.add(banner)
        self.db.commit()
        self.db.refresh(banner)
        return banner

    def delete(self, banner: BannerModel) -> None:
        self.db.delete(banner)
        self.db.commit()

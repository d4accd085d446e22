# storefront/services/banner_service.py
from sqlalchemy.orm import Session

from storefront.data.models.banner import BannerModel
from storefront.domain.errors import NotFoundError
from storefront.domain.schemas import BannerCreate, BannerUpdate
from storefront.repos.banner_repo import BannerRepo


class BannerService:
    def __init__(self, db: Session):
        self.repo = BannerRepo(db)

    def list_banners(self, banner_type: str | None = None) -> list[BannerModel]:
        return self.repo.list_banners(banner_type)

    def get_banner(self, banner_id: int) -> BannerModel:
        banner = self.repo.get_banner(banner_id)
        if not banner:
            raise NotFoundError("Banner not found")
        return banner

    def create_banner(self, payload: BannerCreate) -> BannerModel:
        return self.repo.save(BannerModel(**payload.model_dump()))

    def update_banner(self, banner_id: int, payload: BannerUpdate) -> BannerModel:
        banner = self.get_banner(banner_id)
        for field, value in payload.model_dump(exclude_unset=True).items():
            setattr(banner, field, value)
        return self.repo.save(banner)

    def delete_banner(self, banner_id: int) -> None:
        self.repo.delete(self.get_banner(banner_id))

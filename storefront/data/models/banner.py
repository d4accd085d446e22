from sqlalchemy import Column, Integer, String, Text, Boolean

from storefront.data.database import Base


class BannerModel(Base):
    __tablename__ = "banners"

    id = Column(Integer, primary_key=True)
    type = Column(String, nullable=False, index=True)  # hero, promotion, ...
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    image = Column(String, nullable=False)
    mobile_image = Column(String, nullable=True)
    link = Column(String, nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    position = Column(Integer, nullable=False, default=0)

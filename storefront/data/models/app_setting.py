from sqlalchemy import Column, String, JSON

from storefront.data.database import Base


class AppSettingModel(Base):
    __tablename__ = "app_settings"

    key = Column(String, primary_key=True)
    value = Column(JSON, nullable=False)

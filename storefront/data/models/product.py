from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, Numeric, JSON, ForeignKey, DateTime
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    sku = Column(String, nullable=False, unique=True)
    price = Column(Numeric(12, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    images = Column(JSON, nullable=False, default=list)  # kolejnosc ma znaczenie, [0] to miniatura
    variants = Column(JSON, nullable=True)  # [{"name": "Size", "value": "XL"}, ...]
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    category = relationship("CategoryModel", back_populates="products")

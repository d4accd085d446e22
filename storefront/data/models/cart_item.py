from sqlalchemy import Column, Integer, ForeignKey, CheckConstraint, JSON
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    quantity = Column(Integer, nullable=False)
    # wybrany wariant (rozmiar, kolor); ten sam produkt w dwoch rozmiarach = dwie pozycje
    variant_info = Column(JSON, nullable=True)

    product = relationship("ProductModel")

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_cart_quantity_positive"),
    )

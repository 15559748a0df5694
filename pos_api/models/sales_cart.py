"""Sales cart model (pending lines per user and store)."""
from sqlalchemy import Column, Integer, BigInteger, DateTime, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from pos_api.database import Base, BigId
import enum


class DiscountType(str, enum.Enum):
    """How a discount value is interpreted."""
    FIXED = 'FIXED'
    PERCENTAGE = 'PERCENTAGE'


class CartLine(Base):
    """
    Cart Line - one pending product selection of a user at a store.

    (user_id, store_id, product_id) is unique; adding the same product again
    accumulates quantity on the existing row.
    """

    __tablename__ = 'sales_cart'
    __table_args__ = (
        UniqueConstraint('user_id', 'store_id', 'product_id', name='uq_sales_cart_user_store_product'),
    )

    id = Column(BigId, primary_key=True, autoincrement=True)
    user_id = Column(BigId, ForeignKey('users.id'), nullable=False, index=True)
    store_id = Column(BigId, ForeignKey('stores.id'), nullable=False, index=True)
    product_id = Column(BigId, ForeignKey('products.id'), nullable=False)

    qty = Column(Integer, nullable=False, default=0)
    base_price = Column(BigInteger, nullable=False)
    discount_type = Column(Enum(DiscountType, name='discount_type'), nullable=False, default=DiscountType.FIXED)
    discount_value = Column(BigInteger, nullable=False, default=0)
    discount_amount = Column(BigInteger, nullable=False, default=0)
    sale_price = Column(BigInteger, nullable=False)

    created = Column(DateTime, nullable=False, server_default=func.now())
    updated = Column(DateTime, nullable=False, server_default=func.now())

    # Relationships
    product = relationship('Product')

    @property
    def line_total(self):
        return self.sale_price * self.qty

    def __repr__(self):
        return f"<CartLine(id={self.id}, product_id={self.product_id}, qty={self.qty})>"

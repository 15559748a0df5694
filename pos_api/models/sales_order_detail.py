"""Sales order detail model."""
from sqlalchemy import Column, Integer, BigInteger, Enum, ForeignKey
from sqlalchemy.orm import relationship
from pos_api.database import Base, BigId
from pos_api.models.sales_cart import DiscountType


class SalesOrderDetail(Base):
    """Sales Order Detail - a cart line frozen into an order."""

    __tablename__ = 'sales_order_details'

    id = Column(BigId, primary_key=True, autoincrement=True)
    order_id = Column(BigId, ForeignKey('sales_orders.id', ondelete='CASCADE'), nullable=False, index=True)
    product_id = Column(BigId, ForeignKey('products.id'), nullable=False)
    qty = Column(Integer, nullable=False)
    base_price = Column(BigInteger, nullable=False)
    discount_type = Column(Enum(DiscountType, name='discount_type'), nullable=False)
    discount_value = Column(BigInteger, nullable=False, default=0)
    discount_amount = Column(BigInteger, nullable=False, default=0)
    sale_price = Column(BigInteger, nullable=False)
    total_price = Column(BigInteger, nullable=False)

    # Relationships
    order = relationship('SalesOrder', back_populates='details')
    product = relationship('Product')

    def __repr__(self):
        return f"<SalesOrderDetail(id={self.id}, product_id={self.product_id}, qty={self.qty})>"

"""Stock record model."""
from sqlalchemy import Column, BigInteger, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from pos_api.database import Base, BigId


class StockRecord(Base):
    """
    Available quantity of one product in one store.

    `qty` is signed: checkout may drive it below zero.
    """

    __tablename__ = 'stock'

    store_id = Column(BigId, ForeignKey('stores.id'), primary_key=True)
    product_id = Column(BigId, ForeignKey('products.id'), primary_key=True)
    qty = Column(BigInteger, nullable=False, default=0, server_default='0')
    updated = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    product = relationship('Product')

    def __repr__(self):
        return f"<StockRecord(store_id={self.store_id}, product_id={self.product_id}, qty={self.qty})>"

"""Sales order model."""
from sqlalchemy import Column, String, BigInteger, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from pos_api.database import Base, BigId


class SalesOrder(Base):
    """Sales order header, written once per successful checkout."""

    __tablename__ = 'sales_orders'

    id = Column(BigId, primary_key=True, autoincrement=True)
    # Time-derived; not unique-constrained
    order_number = Column(String(32), nullable=False, index=True)
    user_id = Column(BigId, ForeignKey('users.id'), nullable=False, index=True)
    store_id = Column(BigId, ForeignKey('stores.id'), nullable=False, index=True)
    date = Column(Date, nullable=False)
    grand_total = Column(BigInteger, nullable=False)
    payment_cash = Column(BigInteger, nullable=False, default=0)
    payment_non_cash = Column(BigInteger, nullable=False, default=0)
    receivable = Column(BigInteger, nullable=False, default=0)
    created = Column(DateTime, nullable=False, server_default=func.now())

    # Relationships
    details = relationship(
        'SalesOrderDetail',
        back_populates='order',
        cascade='all, delete-orphan',
        order_by='SalesOrderDetail.id'
    )

    def __repr__(self):
        return f"<SalesOrder(id={self.id}, order_number='{self.order_number}', grand_total={self.grand_total})>"

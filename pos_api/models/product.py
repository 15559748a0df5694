"""Product model."""
from sqlalchemy import Column, String, Boolean, BigInteger, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from pos_api.database import Base, BigId


class Product(Base):
    """Catalog product, shared by every store of the owning company."""

    __tablename__ = 'products'

    id = Column(BigId, primary_key=True, autoincrement=True)
    company_id = Column(BigId, ForeignKey('companies.id'), nullable=False, index=True)
    sku = Column(String(64), nullable=True)
    name = Column(String(255), nullable=False)
    # Prices are integers in the smallest currency unit
    purchase_price = Column(BigInteger, nullable=False, default=0, server_default='0')
    sale_price = Column(BigInteger, nullable=False, default=0, server_default='0')
    unit_name = Column(String(32), nullable=True)
    is_deleted = Column(Boolean, nullable=False, default=False, server_default='0')
    created = Column(DateTime, nullable=False, server_default=func.now())
    updated = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    company = relationship('Company')

    def to_dict(self, include_purchase_price=True):
        data = {
            'id': self.id,
            'sku': self.sku,
            'name': self.name,
            'sale_price': self.sale_price,
            'unit_name': self.unit_name,
        }
        if include_purchase_price:
            data['purchase_price'] = self.purchase_price
        return data

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', sku='{self.sku}')>"

"""Application user model."""
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from pos_api.database import Base, BigId


class AppUser(Base):
    """Cashier or back-office user, always attached to one company."""

    __tablename__ = 'users'

    id = Column(BigId, primary_key=True, autoincrement=True)
    company_id = Column(BigId, ForeignKey('companies.id'), nullable=False, index=True)
    full_name = Column(String(255), nullable=False)
    initial = Column(String(16), nullable=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    created = Column(DateTime, nullable=False, server_default=func.now())

    # Relationships
    company = relationship('Company', back_populates='users')
    stores = relationship('Store', secondary='user_stores', order_by='Store.id')
    tokens = relationship('AuthToken', back_populates='user', cascade='all, delete-orphan')

    def __repr__(self):
        return f"<AppUser(id={self.id}, email='{self.email}')>"

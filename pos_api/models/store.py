"""Store and user-store assignment models."""
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from pos_api.database import Base, BigId


class Store(Base):
    """Physical store (outlet) of a company."""

    __tablename__ = 'stores'

    id = Column(BigId, primary_key=True, autoincrement=True)
    company_id = Column(BigId, ForeignKey('companies.id'), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    initial = Column(String(16), nullable=True)
    created = Column(DateTime, nullable=False, server_default=func.now())

    # Relationships
    company = relationship('Company', back_populates='stores')

    def to_dict(self):
        return {'id': self.id, 'name': self.name, 'initial': self.initial}

    def __repr__(self):
        return f"<Store(id={self.id}, name='{self.name}')>"


class UserStore(Base):
    """Stores a user is allowed to sell from."""

    __tablename__ = 'user_stores'

    user_id = Column(BigId, ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)
    store_id = Column(BigId, ForeignKey('stores.id', ondelete='CASCADE'), primary_key=True)

    def __repr__(self):
        return f"<UserStore(user_id={self.user_id}, store_id={self.store_id})>"

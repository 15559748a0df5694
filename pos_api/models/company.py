"""Company model."""
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from pos_api.database import Base, BigId


class Company(Base):
    """Company - owner of stores, users and the product catalog."""

    __tablename__ = 'companies'

    id = Column(BigId, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    created = Column(DateTime, nullable=False, server_default=func.now())

    # Relationships
    users = relationship('AppUser', back_populates='company')
    stores = relationship('Store', back_populates='company')

    def __repr__(self):
        return f"<Company(id={self.id}, name='{self.name}')>"

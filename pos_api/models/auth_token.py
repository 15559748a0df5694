"""Session token model."""
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from pos_api.database import Base, BigId


class AuthToken(Base):
    """
    Bearer token handed to API clients.

    A token is valid while `expired` lies in the future; expired rows are
    simply ignored by the resolver.
    """

    __tablename__ = 'tokens'

    id = Column(BigId, primary_key=True, autoincrement=True)
    token = Column(String(64), nullable=False, unique=True, index=True)
    user_id = Column(BigId, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    expired = Column(DateTime, nullable=False)

    # Relationships
    user = relationship('AppUser', back_populates='tokens')

    def __repr__(self):
        return f"<AuthToken(id={self.id}, user_id={self.user_id}, expired={self.expired})>"

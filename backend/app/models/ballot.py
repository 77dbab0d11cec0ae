"""Ballot and Vote ORM models."""
import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database import Base


class Ballot(Base):
    __tablename__ = "ballots"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    group_id = Column(String(36), ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True)
    # One ballot per invite, enforced by the store as well as by the ballot service
    invite_id = Column(String(36), ForeignKey("invites.id", ondelete="CASCADE"), nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    votes = relationship("Vote", back_populates="ballot", cascade="all, delete-orphan")


class Vote(Base):
    __tablename__ = "votes"

    ballot_id = Column(String(36), ForeignKey("ballots.id", ondelete="CASCADE"), primary_key=True)
    category_id = Column(String(36), ForeignKey("categories.id"), primary_key=True)
    nominee_id = Column(String(36), ForeignKey("nominees.id"), nullable=False, index=True)

    ballot = relationship("Ballot", back_populates="votes")

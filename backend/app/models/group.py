"""Group ORM model — a voting room."""
import uuid
from sqlalchemy import Column, String, Integer, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database import Base


class Group(Base):
    __tablename__ = "groups"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    code = Column(String(16), nullable=False, unique=True, index=True)
    title = Column(String(150), nullable=False)
    max_members = Column(Integer, nullable=False)
    reveal_at = Column(DateTime(timezone=True), nullable=True)  # set once, never cleared
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    invites = relationship("Invite", back_populates="group", cascade="all, delete-orphan")
    categories = relationship(
        "Category",
        back_populates="group",
        cascade="all, delete-orphan",
        order_by="Category.sort_order",
    )

    @property
    def is_revealed(self) -> bool:
        return self.reveal_at is not None

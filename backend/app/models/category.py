"""Category and Nominee ORM models — a group's copy of its selected catalog entries."""
import uuid
from sqlalchemy import Column, String, Integer, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    group_id = Column(String(36), ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(150), nullable=False)
    sort_order = Column(Integer, nullable=False)

    group = relationship("Group", back_populates="categories")
    nominees = relationship(
        "Nominee",
        back_populates="category",
        cascade="all, delete-orphan",
        order_by="Nominee.sort_order",
    )


class Nominee(Base):
    __tablename__ = "nominees"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    category_id = Column(String(36), ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    sort_order = Column(Integer, nullable=False)

    category = relationship("Category", back_populates="nominees")

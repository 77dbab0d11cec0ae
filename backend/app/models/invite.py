"""Invite ORM model — one participant slot in a group, addressed by a secret token."""
import uuid
import enum
from sqlalchemy import Column, String, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import relationship
from app.database import Base, utcnow


class InviteRole(str, enum.Enum):
    host = "host"
    guest = "guest"


class Invite(Base):
    __tablename__ = "invites"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    group_id = Column(String(36), ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True)
    token = Column(String(128), nullable=False, unique=True, index=True)
    display_name = Column(String(100), nullable=False)
    role = Column(SAEnum(InviteRole), nullable=False, default=InviteRole.guest)
    used_at = Column(DateTime(timezone=True), nullable=True)  # set when the ballot is cast
    # Python-side default keeps sub-second ordering within a batch
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    group = relationship("Group", back_populates="invites")

    @property
    def has_voted(self) -> bool:
        return self.used_at is not None

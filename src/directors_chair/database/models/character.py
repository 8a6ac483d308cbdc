from sqlalchemy import Column, Text, ForeignKey, Index
from sqlalchemy.orm import relationship

from directors_chair.database.models.base import Base, SQLITE_NOW, SqliteTimestamp
from directors_chair.utils.common_models import utc_now


class Character(Base):
    """Character model - reusable persona owned by a project"""
    __tablename__ = "characters"
    __table_args__ = (
        Index("idx_characters_project", "project_id"),
    )

    id = Column(Text, primary_key=True)
    project_id = Column(Text, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)

    name = Column(Text, nullable=False)
    description = Column(Text, default="", server_default="")
    photo_data = Column(Text, default="", server_default="")  # Inline data URL or reference

    created_at = Column(SqliteTimestamp, default=utc_now, server_default=SQLITE_NOW)

    project = relationship("Project", back_populates="characters")

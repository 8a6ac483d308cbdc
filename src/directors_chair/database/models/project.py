from sqlalchemy import Column, Text
from sqlalchemy.orm import relationship

from directors_chair.database.models.base import Base, SQLITE_NOW, SqliteTimestamp
from directors_chair.utils.common_models import utc_now


class Project(Base):
    """Project model - root of the ownership tree"""
    __tablename__ = "projects"

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    genre = Column(Text, default="drama", server_default="drama")
    synopsis = Column(Text, default="", server_default="")
    tone = Column(Text, default="cinematic", server_default="cinematic")

    created_at = Column(SqliteTimestamp, default=utc_now, server_default=SQLITE_NOW)
    updated_at = Column(SqliteTimestamp, default=utc_now, server_default=SQLITE_NOW)

    # Relationships (the database performs the cascade, see passive_deletes)
    characters = relationship(
        "Character",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Character.created_at",
    )
    scenes = relationship(
        "Scene",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Scene.sort_order",
    )

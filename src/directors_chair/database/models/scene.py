import json
from typing import List

from sqlalchemy import Column, Text, ForeignKey, Integer, Index
from sqlalchemy.orm import relationship

from directors_chair.database.models.base import Base, SQLITE_NOW, SqliteTimestamp
from directors_chair.database.models.status import SceneStatus
from directors_chair.logger import logger
from directors_chair.utils.common_models import utc_now


class Scene(Base):
    """Scene model - one ordered unit of a project's storyboard"""
    __tablename__ = "scenes"
    __table_args__ = (
        Index("idx_scenes_project", "project_id"),
        Index("idx_scenes_order", "project_id", "sort_order"),
    )

    id = Column(Text, primary_key=True)
    project_id = Column(Text, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)

    # Author-facing ordinal, may diverge from sort_order
    scene_number = Column(Integer, nullable=False)
    title = Column(Text, default="", server_default="")
    description = Column(Text, default="", server_default="")
    prompt = Column(Text, default="", server_default="")

    # Shot settings
    camera_angle = Column(Text, default="medium shot", server_default="medium shot")
    lighting = Column(Text, default="natural", server_default="natural")
    duration = Column(Integer, default=5, server_default="5")  # Seconds
    dialog = Column(Text, default="", server_default="")

    # Soft references to Character ids, never validated by the database
    characters_json = Column(Text, default="[]", server_default="[]")

    status = Column(Text, default=SceneStatus.PENDING.value, server_default=SceneStatus.PENDING.value)
    video_url = Column(Text, default="", server_default="")
    sort_order = Column(Integer, default=0, server_default="0")

    created_at = Column(SqliteTimestamp, default=utc_now, server_default=SQLITE_NOW)

    project = relationship("Project", back_populates="scenes")
    video_jobs = relationship(
        "VideoJob",
        back_populates="scene",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="VideoJob.started_at",
    )

    @property
    def character_ids(self) -> List[str]:
        """Referenced character ids; malformed payloads read as an empty list"""
        try:
            ids = json.loads(self.characters_json or "[]")
        except (TypeError, ValueError):
            logger.warning(f"[SCENE] Scene {self.id} has malformed characters_json, treating as empty")
            return []
        if not isinstance(ids, list):
            logger.warning(f"[SCENE] Scene {self.id} characters_json is not a list, treating as empty")
            return []
        return [str(i) for i in ids if isinstance(i, (str, int)) and not isinstance(i, bool)]

from sqlalchemy import Column, Text, ForeignKey, REAL, Index
from sqlalchemy.orm import relationship

from directors_chair.database.models.base import Base, SQLITE_NOW, SqliteTimestamp
from directors_chair.database.models.status import VideoJobStatus
from directors_chair.utils.common_models import utc_now


class VideoJob(Base):
    """Video job model - one invocation of an external generation provider for a scene"""
    __tablename__ = "video_jobs"
    __table_args__ = (
        Index("idx_jobs_scene", "scene_id"),
    )

    id = Column(Text, primary_key=True)
    scene_id = Column(Text, ForeignKey("scenes.id", ondelete="CASCADE"), nullable=False)

    provider = Column(Text, nullable=False)  # kling, minimax, wan, ...
    job_id = Column(Text, nullable=False)  # Provider's own tracking id

    status = Column(Text, default=VideoJobStatus.QUEUED.value, server_default=VideoJobStatus.QUEUED.value)
    video_url = Column(Text, default="", server_default="")
    cost = Column(REAL, default=0.0, server_default="0.0")

    started_at = Column(SqliteTimestamp, default=utc_now, server_default=SQLITE_NOW)
    completed_at = Column(SqliteTimestamp, nullable=True)  # Set once, on terminal status

    scene = relationship("Scene", back_populates="video_jobs")

    @property
    def is_terminal(self) -> bool:
        try:
            return VideoJobStatus(self.status).is_terminal
        except ValueError:
            return False

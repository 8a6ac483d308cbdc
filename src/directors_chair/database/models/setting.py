from sqlalchemy import Column, Text

from directors_chair.database.models.base import Base


class Setting(Base):
    """Flat key-value application setting (API keys, preferences)"""
    __tablename__ = "settings"

    key = Column(Text, primary_key=True)
    value = Column(Text, nullable=False)  # Structured values are serialized by the caller

from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from storage.util import get_utc_iso8601_timestamp
from .base import Base


class TaskHistoryEntity(Base):
    __tablename__ = "task_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    task_id = Column(Integer, ForeignKey("tasks.id"), nullable=False, index=True)
    change_summary = Column(Text, nullable=False)
    changed_at = Column(String, nullable=False, default=get_utc_iso8601_timestamp)

    task = relationship("TaskEntity", back_populates="history")

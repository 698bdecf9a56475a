from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship
from .base import Base, BaseEntity


class TaskEntity(Base, BaseEntity):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False, default="")
    status = Column(String, nullable=False, default="PENDING", index=True)
    due_date = Column(String, nullable=False)
    deleted_at = Column(String, nullable=True)

    # History rows are append-only; they are never deleted through the task.
    history = relationship(
        "TaskHistoryEntity",
        back_populates="task",
        cascade="save-update, merge",
        order_by="TaskHistoryEntity.id",
    )

"""Task model"""

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from taskpad.core.database import Base
from taskpad.models.enums import Priority, Status, RepeatType


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String, nullable=False)
    content = Column(Text, nullable=False, default="")  # markdown
    goal = Column(Text, nullable=True)  # markdown
    completed = Column(Boolean, nullable=False, default=False)
    priority = Column(String, nullable=False, default=Priority.MEDIUM.value)
    status = Column(String, nullable=False, default=Status.TODO.value)
    estimate = Column(Integer, nullable=True)  # minutes
    due_date = Column(DateTime, nullable=True, index=True)

    # repeat_interval n'a de sens que pour every_n_days
    repeat_type = Column(String, nullable=False, default=RepeatType.NONE.value)
    repeat_interval = Column(Integer, nullable=True)

    total_time_spent = Column(Integer, nullable=False, default=0)  # secondes

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    owner = relationship("User", back_populates="tasks")

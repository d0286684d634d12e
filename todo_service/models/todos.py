"""
Todo model - one row per free-text item created through the API.
"""

import uuid
from sqlalchemy import Boolean, Column, DateTime, Text, Uuid, false
from sqlalchemy.sql import func

from todo_service.db.base import Base


class Todo(Base):
    __tablename__ = "todos"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    text = Column(Text, nullable=False)
    completed = Column(Boolean, nullable=False, default=False, server_default=false())

    # Not exposed over the API; gives list pagination a stable order
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )

"""
Database helpers for the todos endpoint.

Each helper that writes commits its own transaction.
"""

import logging
import uuid as _uuid

from fastapi import HTTPException
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from todo_service.models.pydantic_models.todos import Pagination
from todo_service.models.todos import Todo
from todo_service.tracing import traced

logger = logging.getLogger(__name__)


@traced("db.find_all_todos")
async def find_all_todos(db: AsyncSession, pagination: Pagination) -> list[Todo]:
    query = select(Todo).order_by(Todo.created_at, Todo.id)
    if pagination.offset:
        query = query.offset(pagination.offset)
    # No limit means "everything"
    if pagination.limit is not None:
        query = query.limit(pagination.limit)

    result = await db.execute(query)
    return list(result.scalars().all())


@traced("db.find_one_todo")
async def find_one_todo(db: AsyncSession, todo_id: _uuid.UUID) -> Todo | None:
    result = await db.execute(select(Todo).where(Todo.id == todo_id))
    return result.scalar_one_or_none()


@traced("db.insert_todo")
async def insert_todo(db: AsyncSession, todo: Todo) -> Todo:
    db.add(todo)
    await db.commit()
    await db.refresh(todo)
    return todo


@traced("db.update_todo")
async def update_todo(db: AsyncSession, todo: Todo) -> Todo:
    await db.commit()
    await db.refresh(todo)
    return todo


@traced("db.delete_todo")
async def delete_todo(db: AsyncSession, todo_id: _uuid.UUID) -> _uuid.UUID | None:
    """
    Delete a todo by id.

    Returns:
        The id when a row was deleted, None when nothing matched.
    """
    result = await db.execute(delete(Todo).where(Todo.id == todo_id))
    await db.commit()
    return todo_id if result.rowcount > 0 else None


async def get_todo_or_404(db: AsyncSession, todo_id: _uuid.UUID) -> Todo:
    todo = await find_one_todo(db, todo_id)
    if not todo:
        raise HTTPException(status_code=404, detail="Todo not found")
    return todo

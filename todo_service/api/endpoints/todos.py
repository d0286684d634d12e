"""
Todos API - list, create, update and delete todo items.
"""

import logging
import uuid as _uuid

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from todo_service.api.endpoints.utils.todos import (
    delete_todo,
    find_all_todos,
    get_todo_or_404,
    insert_todo,
    update_todo,
)
from todo_service.db.session import get_db
from todo_service.models.pydantic_models.todos import (
    MAX_PAGE_VALUE,
    Pagination,
    TodoCreate,
    TodoOut,
    TodoUpdate,
)
from todo_service.models.todos import Todo

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=list[TodoOut])
async def todos_index(
    offset: int | None = Query(default=None, ge=0, le=MAX_PAGE_VALUE),
    limit: int | None = Query(default=None, ge=0, le=MAX_PAGE_VALUE),
    db: AsyncSession = Depends(get_db),
):
    """Return todos oldest first; without a limit every row is returned."""
    logger.info("GET /todos")
    return await find_all_todos(db, Pagination(offset=offset, limit=limit))


@router.post("", response_model=TodoOut, status_code=status.HTTP_201_CREATED)
async def todos_create(data: TodoCreate, db: AsyncSession = Depends(get_db)):
    todo = Todo(id=_uuid.uuid4(), text=data.text, completed=False)
    todo = await insert_todo(db, todo)
    logger.info(f"Created todo {todo.id}")
    return todo


@router.patch("/{todo_id}", response_model=TodoOut)
async def todos_update(
    todo_id: _uuid.UUID,
    data: TodoUpdate,
    db: AsyncSession = Depends(get_db),
):
    todo = await get_todo_or_404(db, todo_id)

    if data.text is not None:
        todo.text = data.text
    if data.completed is not None:
        todo.completed = data.completed

    return await update_todo(db, todo)


@router.delete("/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def todos_delete(todo_id: _uuid.UUID, db: AsyncSession = Depends(get_db)):
    deleted = await delete_todo(db, todo_id)
    if deleted is None:
        raise HTTPException(status_code=404, detail="Todo not found")
    logger.info(f"Deleted todo {deleted}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

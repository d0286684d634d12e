"""
Router assembly. Todos are served at the root, e.g. ``/todos``.
"""

from fastapi import APIRouter

from todo_service.api.endpoints import todos

api_router = APIRouter()
api_router.include_router(todos.router, prefix="/todos", tags=["todos"])

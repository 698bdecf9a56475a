from typing import Any, List, Optional

from fastapi import APIRouter, Body, Query, Response

from storage.service import task as task_service

router = APIRouter(prefix="/v1/tasks", tags=["tasks"])


@router.get("")
async def list_tasks(
    status: Optional[List[str]] = Query(None),
    sort_by: str = Query("due_date"),
    sort_order: str = Query("ASC"),
):
    tasks = task_service.list_tasks(status, sort_by=sort_by, sort_order=sort_order)
    return [t.to_dict() for t in tasks]


@router.get("/deleted")
async def list_deleted_tasks():
    return [t.to_dict() for t in task_service.list_deleted_tasks()]


@router.get("/{task_id}")
async def get_task(task_id: int):
    return task_service.get_task(task_id).to_dict()


@router.post("", status_code=201)
async def create_task(payload: Any = Body(...)):
    return task_service.create_task(payload).to_dict()


@router.patch("/{task_id}")
@router.put("/{task_id}")
async def update_task(task_id: int, payload: Any = Body(...)):
    return task_service.update_task(task_id, payload).to_dict()


@router.delete("/{task_id}", status_code=204)
async def delete_task(task_id: int):
    task_service.delete_task(task_id)
    return Response(status_code=204)


@router.get("/{task_id}/history")
async def get_task_history(task_id: int):
    return task_service.get_history(task_id)

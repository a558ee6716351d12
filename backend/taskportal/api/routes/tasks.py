from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from taskportal.api.deps import db, current_session
from taskportal.core.security import SessionClaims
from taskportal.schemas.task import TaskCreate, TaskUpdate, TaskOut
from taskportal.services import tasks as task_service

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=list[TaskOut])
def list_tasks(
    date: date | None = Query(default=None),
    user_id: int | None = Query(default=None),
    s: Session = Depends(db),
    sess: SessionClaims = Depends(current_session),
):
    tasks = task_service.list_tasks(s, sess, day=date, user_id=user_id)
    return [TaskOut.model_validate(t) for t in tasks]


@router.post("", response_model=TaskOut, status_code=201)
def create_task(body: TaskCreate, s: Session = Depends(db), sess: SessionClaims = Depends(current_session)):
    task = task_service.create_task(
        s,
        sess.user_id,
        body.task_name,
        day=body.date,
        plan=body.plan,
        result=body.result,
    )
    return TaskOut.model_validate(task)


@router.put("/{task_id}", response_model=TaskOut)
def update_task(task_id: int, body: TaskUpdate, s: Session = Depends(db), sess: SessionClaims = Depends(current_session)):
    task = task_service.update_task(s, sess, task_id, task_name=body.task_name, plan=body.plan, result=body.result)
    return TaskOut.model_validate(task)


@router.delete("/{task_id}")
def delete_task(task_id: int, s: Session = Depends(db), sess: SessionClaims = Depends(current_session)):
    task_service.delete_task(s, sess, task_id)
    return {"success": True}

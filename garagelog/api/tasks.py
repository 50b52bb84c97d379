"""Task API endpoints. Tasks are authorized against their parent job's owner."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from garagelog.api.dependencies import (
    CurrentClaims,
    ensure_owner,
    get_job_repository,
    get_task_repository,
)
from garagelog.errors import NotModified
from garagelog.models.enums import SortKey
from garagelog.repositories import JobRepository, TaskRepository
from garagelog.schemas.job import Completion
from garagelog.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from garagelog.services.auth import Claims

router = APIRouter(prefix="/jobs/{job_id}/tasks", tags=["tasks"])

Jobs = Annotated[JobRepository, Depends(get_job_repository)]
Tasks = Annotated[TaskRepository, Depends(get_task_repository)]


def check_job_owner(jobs: JobRepository, claims: Claims, job_id: int) -> None:
    job = jobs.get_by_id(job_id)
    ensure_owner(claims, job.user_id, f"tasks of job {job_id}")


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    job_id: int,
    claims: CurrentClaims,
    jobs: Jobs,
    tasks: Tasks,
    is_complete: bool | None = None,
    search: str | None = None,
    sort: SortKey | None = None,
):
    """List the tasks of a job."""
    jobs.get_by_id(job_id)
    return tasks.list(job_id=job_id, is_complete=is_complete, search=search, sort=sort)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    job_id: int,
    task_data: TaskCreate,
    claims: CurrentClaims,
    jobs: Jobs,
    tasks: Tasks,
):
    """Add a task to a job."""
    check_job_owner(jobs, claims, job_id)
    task_id = tasks.create(job_id=job_id, **task_data.model_dump())
    return tasks.get_by_id(task_id)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(job_id: int, task_id: int, claims: CurrentClaims, tasks: Tasks):
    """Get a specific task."""
    return tasks.get_for_job(job_id, task_id)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    job_id: int,
    task_id: int,
    task_data: TaskUpdate,
    claims: CurrentClaims,
    jobs: Jobs,
    tasks: Tasks,
):
    """Update a task."""
    check_job_owner(jobs, claims, job_id)
    tasks.get_for_job(job_id, task_id)

    values = task_data.model_dump(exclude_unset=True, exclude_none=True)
    if not values:
        raise NotModified("No fields to update")

    tasks.update(task_id, values, job_id)
    return tasks.get_by_id(task_id)


@router.patch("/{task_id}/complete", response_model=TaskResponse)
async def complete_task(
    job_id: int,
    task_id: int,
    completion: Completion,
    claims: CurrentClaims,
    jobs: Jobs,
    tasks: Tasks,
):
    """Mark a task complete or reopen it."""
    check_job_owner(jobs, claims, job_id)
    tasks.get_for_job(job_id, task_id)
    tasks.set_complete(job_id, task_id, completion.is_complete)
    return tasks.get_by_id(task_id)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(job_id: int, task_id: int, claims: CurrentClaims, jobs: Jobs, tasks: Tasks):
    """Delete a task."""
    check_job_owner(jobs, claims, job_id)
    tasks.delete(task_id, job_id)

"""Department Endpoints."""

from typing import List

from fastapi import APIRouter, status

from compliance_ai.core.database.entities import Department
from compliance_ai.core.models.io.tracking import DepartmentCreate, DepartmentRead
from compliance_ai.server.services.deps import ReposDep

router = APIRouter()


@router.get(
    "",
    response_model=List[DepartmentRead],
    summary="List Departments",
    description="Retrieve all departments with their compliance scores.",
    response_description="A list of department objects.",
)
async def list_departments(repos: ReposDep) -> List[DepartmentRead]:
    return [DepartmentRead.model_validate(d) for d in await repos.departments.list()]


@router.post(
    "",
    response_model=DepartmentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Department",
    description="Create a department. Names are unique.",
    response_description="The created department object.",
    responses={409: {"description": "Department already exists"}},
)
async def create_department(data: DepartmentCreate, repos: ReposDep) -> DepartmentRead:
    department = await repos.departments.create(Department(**data.model_dump()))
    return DepartmentRead.model_validate(department)

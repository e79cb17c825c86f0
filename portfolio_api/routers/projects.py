from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from portfolio_api.database import MAX_ROW_ID, get_db
from portfolio_api.models.project import Project
from portfolio_api.schemas.project import ProjectResponse, ProjectStatus, ProjectWrite
from portfolio_api.services.auth_middleware import get_current_admin
from portfolio_api.services.upload_service import remove_upload, store_upload
from portfolio_api.utils.exceptions import NotFound
from portfolio_api.utils.list_fields import dump_string_list
from portfolio_api.utils.payload import RequestPayload, request_payload, validate_payload
from portfolio_api.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api/projects", tags=["Projects"])
admin_router = APIRouter(
    prefix="/api/projects",
    tags=["Projects Admin"],
    dependencies=[Depends(get_current_admin)],
)

IMAGE_FIELD = "project_image"


def _project_payload(project: Project) -> dict:
    return ProjectResponse.model_validate(project).model_dump()


def _column_values(body: ProjectWrite) -> dict:
    values = body.model_dump()
    values["technologies"] = dump_string_list(body.technologies)
    values["gallery_images"] = dump_string_list(body.gallery_images)
    values["status"] = body.status.value
    return values


def _get_project(db: Session, project_id: int) -> Project:
    project = db.query(Project).filter(Project.id == project_id).first()
    if not project:
        raise NotFound("Project not found")
    return project


@router.get("")
def list_projects(
    featured: bool = Query(False, description="Only return featured projects."),
    status_filter: ProjectStatus | None = Query(None, alias="status"),
    db: Session = Depends(get_db),
):
    try:
        query = db.query(Project)
        if featured:
            query = query.filter(Project.is_featured == True)
        if status_filter is not None:
            query = query.filter(Project.status == status_filter.value)
        projects = query.order_by(Project.sort_order.asc(), Project.created_at.desc()).all()
        return create_response(
            message="Projects fetched",
            data={
                "count": len(projects),
                "projects": [_project_payload(project) for project in projects],
            },
        )
    except Exception as exc:
        return handle_exception(exc)


@router.get("/{project_id}")
def get_project(
    project_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    db: Session = Depends(get_db),
):
    try:
        project = _get_project(db, project_id)
        return create_response(message="Project fetched", data=_project_payload(project))
    except Exception as exc:
        return handle_exception(exc)


@admin_router.post("", status_code=status.HTTP_201_CREATED)
def create_project(
    payload: RequestPayload = Depends(request_payload(IMAGE_FIELD)),
    db: Session = Depends(get_db),
):
    new_image = None
    try:
        body = validate_payload(ProjectWrite, payload.data)
        values = _column_values(body)
        if payload.upload is not None:
            new_image = store_upload(payload.upload, IMAGE_FIELD)["path"]
            values["image_url"] = new_image

        project = Project(**values)
        db.add(project)
        db.commit()
        db.refresh(project)
        return create_response(
            message="Project created successfully",
            data=_project_payload(project),
            status_code=status.HTTP_201_CREATED,
        )
    except Exception as exc:
        db.rollback()
        remove_upload(new_image)
        return handle_exception(exc)


@admin_router.put("/{project_id}")
def update_project(
    project_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    payload: RequestPayload = Depends(request_payload(IMAGE_FIELD)),
    db: Session = Depends(get_db),
):
    new_image = None
    committed = False
    try:
        body = validate_payload(ProjectWrite, payload.data)
        values = _column_values(body)
        old_image = None
        if payload.upload is not None:
            old_image = db.query(Project.image_url).filter(Project.id == project_id).scalar()
            new_image = store_upload(payload.upload, IMAGE_FIELD)["path"]
            values["image_url"] = new_image

        updated = (
            db.query(Project)
            .filter(Project.id == project_id)
            .update(values, synchronize_session=False)
        )
        if not updated:
            raise NotFound("Project not found")
        db.commit()
        committed = True

        if new_image:
            remove_upload(old_image)
        project = _get_project(db, project_id)
        return create_response(message="Project updated successfully", data=_project_payload(project))
    except Exception as exc:
        if not committed:
            db.rollback()
            remove_upload(new_image)
        return handle_exception(exc)


@admin_router.delete("/{project_id}")
def delete_project(
    project_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    db: Session = Depends(get_db),
):
    try:
        image_url = db.query(Project.image_url).filter(Project.id == project_id).scalar()
        remove_upload(image_url)

        deleted = (
            db.query(Project)
            .filter(Project.id == project_id)
            .delete(synchronize_session=False)
        )
        if not deleted:
            raise NotFound("Project not found")
        db.commit()
        return create_response(
            message="Project deleted successfully",
            data={"deleted": True, "project_id": project_id},
        )
    except Exception as exc:
        db.rollback()
        return handle_exception(exc)

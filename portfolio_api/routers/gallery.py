from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from portfolio_api.database import MAX_ROW_ID, get_db
from portfolio_api.models.gallery import GalleryItem
from portfolio_api.schemas.gallery import GalleryItemResponse, GalleryItemWrite
from portfolio_api.services.auth_middleware import get_current_admin
from portfolio_api.services.upload_service import remove_upload, store_upload
from portfolio_api.utils.exceptions import InvalidUpload, NotFound
from portfolio_api.utils.list_fields import dump_string_list
from portfolio_api.utils.payload import RequestPayload, request_payload, validate_payload
from portfolio_api.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api/gallery", tags=["Gallery"])
admin_router = APIRouter(
    prefix="/api/gallery",
    tags=["Gallery Admin"],
    dependencies=[Depends(get_current_admin)],
)

IMAGE_FIELD = "gallery_image"


def _gallery_payload(item: GalleryItem) -> dict:
    return GalleryItemResponse.model_validate(item).model_dump()


def _column_values(body: GalleryItemWrite) -> dict:
    values = body.model_dump()
    values["tags"] = dump_string_list(body.tags)
    return values


def _get_item(db: Session, item_id: int) -> GalleryItem:
    item = db.query(GalleryItem).filter(GalleryItem.id == item_id).first()
    if not item:
        raise NotFound("Gallery item not found")
    return item


@router.get("")
def list_gallery(
    category: str | None = Query(None),
    featured: bool = Query(False, description="Only return featured images."),
    db: Session = Depends(get_db),
):
    try:
        query = db.query(GalleryItem)
        if category:
            query = query.filter(GalleryItem.category == category)
        if featured:
            query = query.filter(GalleryItem.is_featured == True)
        items = query.order_by(GalleryItem.sort_order.asc(), GalleryItem.created_at.desc()).all()
        return create_response(
            message="Gallery fetched",
            data={"count": len(items), "gallery": [_gallery_payload(item) for item in items]},
        )
    except Exception as exc:
        return handle_exception(exc)


# Declared before "/{item_id}" so the literal path wins.
@router.get("/categories")
def list_gallery_categories(db: Session = Depends(get_db)):
    try:
        rows = (
            db.query(GalleryItem.category)
            .filter(GalleryItem.category.isnot(None))
            .distinct()
            .order_by(GalleryItem.category.asc())
            .all()
        )
        categories = [row[0] for row in rows]
        return create_response(message="Gallery categories fetched", data={"categories": categories})
    except Exception as exc:
        return handle_exception(exc)


@router.get("/{item_id}")
def get_gallery_item(
    item_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    db: Session = Depends(get_db),
):
    try:
        return create_response(message="Gallery item fetched", data=_gallery_payload(_get_item(db, item_id)))
    except Exception as exc:
        return handle_exception(exc)


@admin_router.post("", status_code=status.HTTP_201_CREATED)
def create_gallery_item(
    payload: RequestPayload = Depends(request_payload(IMAGE_FIELD)),
    db: Session = Depends(get_db),
):
    new_image = None
    try:
        body = validate_payload(GalleryItemWrite, payload.data)
        if payload.upload is None:
            raise InvalidUpload("Image file is required")
        new_image = store_upload(payload.upload, IMAGE_FIELD)["path"]

        item = GalleryItem(**_column_values(body), image_url=new_image, thumbnail_url=new_image)
        db.add(item)
        db.commit()
        db.refresh(item)
        return create_response(
            message="Gallery image uploaded successfully",
            data=_gallery_payload(item),
            status_code=status.HTTP_201_CREATED,
        )
    except Exception as exc:
        db.rollback()
        remove_upload(new_image)
        return handle_exception(exc)


@admin_router.put("/{item_id}")
def update_gallery_item(
    item_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    payload: RequestPayload = Depends(request_payload(IMAGE_FIELD)),
    db: Session = Depends(get_db),
):
    new_image = None
    committed = False
    try:
        body = validate_payload(GalleryItemWrite, payload.data)
        values = _column_values(body)
        old_image = None
        if payload.upload is not None:
            old_image = db.query(GalleryItem.image_url).filter(GalleryItem.id == item_id).scalar()
            new_image = store_upload(payload.upload, IMAGE_FIELD)["path"]
            values["image_url"] = new_image
            values["thumbnail_url"] = new_image

        updated = (
            db.query(GalleryItem)
            .filter(GalleryItem.id == item_id)
            .update(values, synchronize_session=False)
        )
        if not updated:
            raise NotFound("Gallery item not found")
        db.commit()
        committed = True

        if new_image:
            remove_upload(old_image)
        item = _get_item(db, item_id)
        return create_response(message="Gallery image updated successfully", data=_gallery_payload(item))
    except Exception as exc:
        if not committed:
            db.rollback()
            remove_upload(new_image)
        return handle_exception(exc)


@admin_router.delete("/{item_id}")
def delete_gallery_item(
    item_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    db: Session = Depends(get_db),
):
    try:
        image_url = db.query(GalleryItem.image_url).filter(GalleryItem.id == item_id).scalar()
        remove_upload(image_url)

        deleted = (
            db.query(GalleryItem)
            .filter(GalleryItem.id == item_id)
            .delete(synchronize_session=False)
        )
        if not deleted:
            raise NotFound("Gallery item not found")
        db.commit()
        return create_response(
            message="Gallery image deleted successfully",
            data={"deleted": True, "gallery_id": item_id},
        )
    except Exception as exc:
        db.rollback()
        return handle_exception(exc)

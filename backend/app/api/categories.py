"""REST API for the conversation category catalog.

`/public` is open to any signed-in user and withholds prompts and redirect
flags. Everything else requires the admin flag.
"""

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.api import serializers
from app.api.deps import get_current_user_id, require_admin
from app.api.schemas import CategoryCreate, CategoryUpdate
from app.core.database import get_session
from app.services import catalog

router = APIRouter()


@router.get("/public")
async def list_public_categories(
    _user_id: int = Depends(get_current_user_id), db: Session = Depends(get_session)
):
    return [serializers.category_public(c) for c in catalog.list_all(db)]


@router.get("/")
async def list_categories(_admin_id: int = Depends(require_admin), db: Session = Depends(get_session)):
    return [serializers.category_full(c) for c in catalog.list_all(db)]


@router.get("/{category_id}")
async def get_category(
    category_id: int, _admin_id: int = Depends(require_admin), db: Session = Depends(get_session)
):
    return serializers.category_full(catalog.get_or_404(db, category_id))


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_category(
    body: CategoryCreate, _admin_id: int = Depends(require_admin), db: Session = Depends(get_session)
):
    return serializers.category_full(catalog.create(db, body.model_dump()))


@router.put("/{category_id}")
async def update_category(
    category_id: int,
    body: CategoryUpdate,
    _admin_id: int = Depends(require_admin),
    db: Session = Depends(get_session),
):
    fields = body.model_dump(exclude_unset=True, exclude_none=True)
    return serializers.category_full(catalog.update(db, category_id, fields))


@router.delete("/{category_id}")
async def delete_category(
    category_id: int, _admin_id: int = Depends(require_admin), db: Session = Depends(get_session)
):
    catalog.delete(db, category_id)
    return {"message": "Category deleted successfully"}

"""Category catalog: named conversation categories with system prompts and display metadata."""

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.core.errors import DuplicateName, InvalidRequest, NotFound
from app.models.category import ConversationCategory

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "description", "prompt")


def list_all(db: Session) -> list[ConversationCategory]:
    return list(db.exec(select(ConversationCategory).order_by(ConversationCategory.id)).all())  # type: ignore


def list_names(db: Session) -> list[str]:
    return list(db.exec(select(ConversationCategory.name).order_by(ConversationCategory.id)).all())  # type: ignore


def get(db: Session, category_id: int) -> ConversationCategory | None:
    return db.get(ConversationCategory, category_id)


def get_or_404(db: Session, category_id: int) -> ConversationCategory:
    category = db.get(ConversationCategory, category_id)
    if not category:
        raise NotFound("Category not found")
    return category


def _clean(fields: dict) -> dict:
    cleaned = dict(fields)
    for key in REQUIRED_FIELDS:
        if isinstance(cleaned.get(key), str):
            cleaned[key] = cleaned[key].strip()
    return cleaned


def _ensure_unique_name(db: Session, name: str, exclude_id: int | None = None) -> None:
    query = select(ConversationCategory).where(ConversationCategory.name == name)
    if exclude_id is not None:
        query = query.where(ConversationCategory.id != exclude_id)
    if db.exec(query).first():
        raise DuplicateName()


def _commit(db: Session, category: ConversationCategory) -> ConversationCategory:
    db.add(category)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent write of the same name
        db.rollback()
        raise DuplicateName()
    db.refresh(category)
    return category


def create(db: Session, fields: dict) -> ConversationCategory:
    fields = _clean(fields)
    missing = [key for key in REQUIRED_FIELDS if not fields.get(key)]
    if missing:
        raise InvalidRequest(f"Missing required fields: {', '.join(missing)}")

    _ensure_unique_name(db, fields["name"])
    category = _commit(db, ConversationCategory(**fields))
    logger.info(f"Created category {category.id} ({category.name!r})")
    return category


def update(db: Session, category_id: int, fields: dict) -> ConversationCategory:
    """Apply a partial update. Only the keys present in `fields` change."""
    category = get_or_404(db, category_id)
    fields = _clean(fields)

    for key in REQUIRED_FIELDS:
        if key in fields and not fields[key]:
            raise InvalidRequest(f"{key} must not be empty")
    if "name" in fields:
        _ensure_unique_name(db, fields["name"], exclude_id=category_id)

    for key, value in fields.items():
        setattr(category, key, value)
    category.updated_at = datetime.now(timezone.utc)
    return _commit(db, category)


def delete(db: Session, category_id: int) -> None:
    category = get_or_404(db, category_id)
    # Sessions keep their category_id; nothing cascades.
    db.delete(category)
    db.commit()
    logger.info(f"Deleted category {category_id}")

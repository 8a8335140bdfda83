"""Press and media article CRUD."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from restaurant_cms.models.media import MediaArticle


def get_articles(db: Session, restaurant_id: int, is_published: bool | None = None) -> list[MediaArticle]:
    """Return articles by sort_order, optionally filtered on publication state."""
    query = select(MediaArticle).where(MediaArticle.restaurant_id == restaurant_id)
    if is_published is not None:
        query = query.where(MediaArticle.is_published.is_(is_published))
    return list(db.scalars(query.order_by(MediaArticle.sort_order.asc(), MediaArticle.id.asc())).all())


def get_article(db: Session, article_id: int, restaurant_id: int) -> MediaArticle | None:
    return db.scalar(
        select(MediaArticle).where(MediaArticle.id == article_id, MediaArticle.restaurant_id == restaurant_id).limit(1)
    )


def create_article(db: Session, restaurant_id: int, data: dict[str, Any]) -> MediaArticle:
    article = MediaArticle(restaurant_id=restaurant_id, **data)
    db.add(article)
    db.commit()
    db.refresh(article)
    return article


def update_article(db: Session, article: MediaArticle, data: dict[str, Any]) -> MediaArticle:
    for field, value in data.items():
        setattr(article, field, value)
    db.commit()
    db.refresh(article)
    return article


def delete_article(db: Session, article: MediaArticle) -> None:
    db.delete(article)
    db.commit()

"""Press and media article endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from restaurant_cms.api.deps import record_audit, resolve_restaurant_id
from restaurant_cms.api.responses import envelope, internal_error
from restaurant_cms.auth import RequestContext, get_request_context, require_admin, require_editor
from restaurant_cms.schemas.media import MediaArticleAdmin, MediaArticleCreate, MediaArticlePublic, MediaArticleUpdate
from restaurant_cms.services import media_service

public_router: APIRouter = APIRouter()
admin_router: APIRouter = APIRouter()


@public_router.get("/media")
def published_articles(context: RequestContext = Depends(get_request_context)) -> JSONResponse:
    """Published articles only, with publish flags and ordering stripped."""
    restaurant_id = resolve_restaurant_id(context)
    try:
        articles = media_service.get_articles(context.db, restaurant_id, is_published=True)
    except Exception:
        return internal_error("Failed to fetch media articles")
    return envelope([MediaArticlePublic.model_validate(article) for article in articles])


@admin_router.get("/media")
def all_articles(context: RequestContext = Depends(require_admin)) -> JSONResponse:
    restaurant_id = resolve_restaurant_id(context)
    try:
        articles = media_service.get_articles(context.db, restaurant_id)
    except Exception:
        return internal_error("Failed to fetch media articles")
    return envelope([MediaArticleAdmin.model_validate(article) for article in articles])


@admin_router.post("/media", status_code=status.HTTP_201_CREATED)
def create_article(payload: MediaArticleCreate, context: RequestContext = Depends(require_editor)) -> JSONResponse:
    restaurant_id = resolve_restaurant_id(context)
    try:
        article = media_service.create_article(context.db, restaurant_id, payload.model_dump())
    except Exception:
        return internal_error("Failed to create media article")
    created = MediaArticleAdmin.model_validate(article)
    record_audit(context, action_type="CREATE", entity_type="MediaArticle", entity_id=article.id, after=created.model_dump(mode="json"))
    return envelope(created, status_code=status.HTTP_201_CREATED)


@admin_router.put("/media/{article_id}")
def update_article(
    article_id: int,
    payload: MediaArticleUpdate,
    context: RequestContext = Depends(require_editor),
) -> JSONResponse:
    restaurant_id = resolve_restaurant_id(context)
    article = media_service.get_article(context.db, article_id, restaurant_id)
    if article is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Media article not found")
    before = MediaArticleAdmin.model_validate(article).model_dump(mode="json")
    try:
        article = media_service.update_article(context.db, article, payload.model_dump(exclude_unset=True))
    except Exception:
        return internal_error("Failed to update media article")
    updated = MediaArticleAdmin.model_validate(article)
    record_audit(
        context,
        action_type="UPDATE",
        entity_type="MediaArticle",
        entity_id=article_id,
        before=before,
        after=updated.model_dump(mode="json"),
    )
    return envelope(updated)


@admin_router.delete("/media/{article_id}")
def delete_article(article_id: int, context: RequestContext = Depends(require_editor)) -> JSONResponse:
    restaurant_id = resolve_restaurant_id(context)
    article = media_service.get_article(context.db, article_id, restaurant_id)
    if article is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Media article not found")
    before = MediaArticleAdmin.model_validate(article).model_dump(mode="json")
    try:
        media_service.delete_article(context.db, article)
    except Exception:
        return internal_error("Failed to delete media article")
    record_audit(context, action_type="DELETE", entity_type="MediaArticle", entity_id=article_id, before=before)
    return envelope()

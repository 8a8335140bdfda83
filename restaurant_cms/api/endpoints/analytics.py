"""Page-view tracking and the admin analytics summary."""

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from restaurant_cms.api.responses import internal_error
from restaurant_cms.auth import RequestContext, get_request_context, require_admin
from restaurant_cms.schemas.analytics import PageViewRequest
from restaurant_cms.services.analytics_service import get_analytics, track_page_view
from restaurant_cms.services.best_effort import best_effort

router: APIRouter = APIRouter()


def _client_ip(request: Request) -> str | None:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip
    return request.client.host if request.client else None


@router.post("/analytics/track")
def track(
    payload: PageViewRequest,
    request: Request,
    context: RequestContext = Depends(get_request_context),
) -> dict[str, bool]:
    """Record a page view; storage failures never reach the visitor."""
    if not payload.path:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Path is required")
    return best_effort(
        lambda: track_page_view(
            context.db,
            path=payload.path,
            ip_address=_client_ip(request),
            user_agent=request.headers.get("user-agent"),
            referrer=request.headers.get("referer"),
            session_id=context.session_id,
        ),
        label="track page view",
        db=context.db,
    )


@router.get("/admin/analytics")
def read_analytics(
    days: int = Query(default=30, ge=1, le=365),
    context: RequestContext = Depends(require_admin),
) -> JSONResponse:
    try:
        summary = get_analytics(context.db, days=days)
    except Exception:
        return internal_error("Failed to aggregate analytics")
    return JSONResponse(content=jsonable_encoder(summary, by_alias=True))

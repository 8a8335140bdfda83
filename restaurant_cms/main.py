"""FastAPI entrypoint for the restaurant site and its admin CMS."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from urllib.parse import parse_qs, quote_plus

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from restaurant_cms.api.api import api_router
from restaurant_cms.api.deps import record_audit
from restaurant_cms.api.responses import error_response
from restaurant_cms.auth import (
    AUTH_COOKIE,
    RequestContext,
    clear_auth_cookie,
    dev_banner_active,
    get_request_context,
    is_admin_path,
    resolve_identity_standalone,
    safe_callback_url,
    set_auth_cookie,
    should_track_path,
    signin_redirect,
)
from restaurant_cms.core.config import INSECURE_JWT_SECRET, settings
from restaurant_cms.db.base import Base
from restaurant_cms.db.seed import ensure_seed_data
from restaurant_cms.db.session import SessionLocal, engine
from restaurant_cms.schemas.contact import ContactEntry
from restaurant_cms.schemas.hours import HoursEntry
from restaurant_cms.schemas.menu import MenuSummary
from restaurant_cms.schemas.restaurant import ContactRead, HoursRead
from restaurant_cms.services import menu_service
from restaurant_cms.services.analytics_service import get_analytics
from restaurant_cms.services.auth_service import authenticate_password, ensure_dev_admin, revoke_auth_token
from restaurant_cms.services.best_effort import best_effort
from restaurant_cms.services.hours_service import list_hours, save_hours
from restaurant_cms.services.location_service import list_contacts, save_contacts
from restaurant_cms.services.media_service import get_articles
from restaurant_cms.services.restaurant_service import (
    DAY_NAMES,
    build_page_context,
    contacts_by_type,
    get_restaurant_by_slug,
    get_restaurant_data,
)
from restaurant_cms.services.result import Loaded, load

BASE_DIR = Path(__file__).resolve().parent
logger = logging.getLogger(__name__)

TRUE_VALUES: set[str] = {"true", "on", "1"}


def check_secret_configuration() -> None:
    """Refuse to boot production with the development signing secret."""
    if settings.jwt_secret_key != INSECURE_JWT_SECRET:
        return
    if settings.is_production:
        raise RuntimeError("JWT_SECRET_KEY must be set in production")
    logger.warning("[SECURITY] JWT_SECRET_KEY not set; using development fallback secret.")


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    check_secret_configuration()
    Base.metadata.create_all(bind=engine)
    if settings.seed_demo_data:
        with SessionLocal() as session:
            try:
                ensure_seed_data(session)
                if not settings.is_production:
                    ensure_dev_admin(session)
            except Exception:
                logger.exception("[BOOTSTRAP] Seed/bootstrap failed; continuing startup.")
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.include_router(api_router, prefix="/api")
app.mount("/static", StaticFiles(directory=BASE_DIR / "static"), name="static")
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))


@app.exception_handler(StarletteHTTPException)
async def api_http_exception_handler(request: Request, exc: StarletteHTTPException):
    if request.url.path.startswith("/api/"):
        return error_response(str(exc.detail), exc.status_code)
    return await http_exception_handler(request, exc)


@app.middleware("http")
async def protect_admin_pages(request: Request, call_next):
    """Redirect unauthenticated requests for /admin pages before any page logic runs."""
    if is_admin_path(request.url.path):
        identity = await run_in_threadpool(resolve_identity_standalone, request.cookies.get(AUTH_COOKIE))
        if identity is None:
            return signin_redirect(request.url.path)
        request.state.identity = identity
    return await call_next(request)


def inject_globals(request: Request) -> dict:
    """Inject values every template needs."""
    return {
        "site_name": settings.site_name,
        "dev_banner": dev_banner_active(request),
        "identity": getattr(request.state, "identity", None),
        "track_page": should_track_path(request.url.path),
        "current_path": request.url.path,
    }


def render_template(request: Request, name: str, context: dict | None = None, status_code: int = 200):
    """Render a template with required request object and shared global context."""
    payload = {"request": request, **inject_globals(request)}
    if context:
        payload.update(context)
    return templates.TemplateResponse(request, name, payload, status_code=status_code)


async def _form_data(request: Request) -> dict[str, str]:
    body = (await request.body()).decode()
    parsed = parse_qs(body, keep_blank_values=True)
    return {key: values[-1] if values else "" for key, values in parsed.items()}


def _forbidden_page(request: Request):
    return render_template(request, "error.html", {"message": "Your role cannot edit content."}, status_code=403)


def _public_page_context(context: RequestContext) -> dict:
    result = load(lambda: get_restaurant_data(context.db, context.restaurant_slug), label="restaurant data")
    page = build_page_context(result)
    page["contacts_by_type"] = contacts_by_type(page["contacts"])
    page["media"] = []
    if isinstance(result, Loaded) and result.data is not None:
        restaurant_id = result.data.id
        media_result = load(lambda: get_articles(context.db, restaurant_id, is_published=True), label="media articles")
        if isinstance(media_result, Loaded):
            page["media"] = media_result.data
    return page


@app.get("/", response_class=HTMLResponse)
def home(request: Request, context: RequestContext = Depends(get_request_context)):
    return render_template(request, "home.html", _public_page_context(context))


@app.get("/menu", response_class=HTMLResponse)
def menu_page(request: Request, context: RequestContext = Depends(get_request_context)):
    return render_template(request, "menu.html", _public_page_context(context))


@app.get("/auth/signin", response_class=HTMLResponse)
def signin_page(
    request: Request,
    callback_url: str | None = Query(default=None, alias="callbackUrl"),
    error: str | None = None,
    context: RequestContext = Depends(get_request_context),
):
    if context.identity is not None:
        return RedirectResponse(url=safe_callback_url(callback_url), status_code=303)
    return render_template(
        request,
        "auth/signin.html",
        {
            "error": error,
            "callback_url": safe_callback_url(callback_url),
            "dev_login_enabled": not settings.is_production,
            "email": "",
        },
    )


@app.post("/auth/signin", response_class=RedirectResponse)
async def signin_submit(request: Request, context: RequestContext = Depends(get_request_context)):
    form = await _form_data(request)
    email = form.get("email", "").strip()
    password = form.get("password", "")
    callback_url = safe_callback_url(form.get("callbackUrl"))
    signed_in = authenticate_password(
        context.db,
        email,
        password,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    if signed_in is None:
        return render_template(
            request,
            "auth/signin.html",
            {
                "error": "Invalid email or password, or this account is not allowed to sign in.",
                "callback_url": callback_url,
                "dev_login_enabled": not settings.is_production,
                "email": email,
            },
            status_code=401,
        )
    _, token = signed_in
    response = RedirectResponse(url=callback_url, status_code=303)
    set_auth_cookie(response, token)
    return response


@app.post("/auth/signout", response_class=RedirectResponse)
@app.get("/auth/signout", response_class=RedirectResponse)
def signout(context: RequestContext = Depends(get_request_context)):
    token = context.auth_token
    if token:
        best_effort(lambda: revoke_auth_token(context.db, token), label="revoke auth token", db=context.db)
    response = RedirectResponse(url="/auth/signin", status_code=303)
    clear_auth_cookie(response)
    return response


def _restaurant_or_none(context: RequestContext):
    return get_restaurant_by_slug(context.db, context.restaurant_slug)


@app.get("/admin", response_class=HTMLResponse)
def admin_dashboard(request: Request, context: RequestContext = Depends(get_request_context)):
    analytics = load(lambda: get_analytics(context.db, days=30), label="analytics")
    return render_template(
        request,
        "admin/dashboard.html",
        {
            "restaurant": _restaurant_or_none(context),
            "analytics": analytics.data if isinstance(analytics, Loaded) else None,
            "message": request.query_params.get("message"),
        },
    )


@app.get("/admin/hours", response_class=HTMLResponse)
def admin_hours_page(request: Request, context: RequestContext = Depends(get_request_context), error: str | None = None):
    restaurant = _restaurant_or_none(context)
    rows = {row.day_of_week: row for row in list_hours(context.db, restaurant.id)} if restaurant else {}
    return render_template(
        request,
        "admin/hours.html",
        {
            "restaurant": restaurant,
            "days": list(enumerate(DAY_NAMES)),
            "rows": rows,
            "error": error,
            "message": request.query_params.get("message"),
        },
    )


@app.post("/admin/hours", response_class=RedirectResponse)
async def admin_hours_submit(request: Request, context: RequestContext = Depends(get_request_context)):
    if context.identity is None or not context.identity.can_write_content:
        return _forbidden_page(request)
    restaurant = _restaurant_or_none(context)
    if restaurant is None:
        raise HTTPException(status_code=404, detail="Restaurant not found")
    form = await _form_data(request)
    try:
        entries = [
            HoursEntry(
                day_of_week=day,
                open_time=form.get(f"open_{day}", "09:00"),
                close_time=form.get(f"close_{day}", "17:00"),
                is_closed=form.get(f"closed_{day}") in TRUE_VALUES,
            )
            for day in range(len(DAY_NAMES))
        ]
    except ValidationError:
        return admin_hours_page(request, context, error="Times must use the HH:MM format.")
    before = [HoursRead.model_validate(row).model_dump(mode="json") for row in list_hours(context.db, restaurant.id)]
    rows = save_hours(context.db, restaurant.id, entries)
    record_audit(
        context,
        action_type="UPDATE",
        entity_type="OperatingHours",
        before={"hours": before},
        after={"hours": [HoursRead.model_validate(row).model_dump(mode="json") for row in rows]},
    )
    logger.info("[ADMIN] Hours saved by %s", context.identity.email)
    return RedirectResponse(url="/admin/hours?message=Hours+saved", status_code=303)


@app.get("/admin/location", response_class=HTMLResponse)
def admin_location_page(request: Request, context: RequestContext = Depends(get_request_context), error: str | None = None):
    restaurant = _restaurant_or_none(context)
    return render_template(
        request,
        "admin/location.html",
        {
            "restaurant": restaurant,
            "contacts": list_contacts(context.db, restaurant.id) if restaurant else [],
            "error": error,
            "message": request.query_params.get("message"),
        },
    )


@app.post("/admin/location", response_class=RedirectResponse)
async def admin_location_submit(request: Request, context: RequestContext = Depends(get_request_context)):
    if context.identity is None or not context.identity.can_write_content:
        return _forbidden_page(request)
    restaurant = _restaurant_or_none(context)
    if restaurant is None:
        raise HTTPException(status_code=404, detail="Restaurant not found")
    form = await _form_data(request)
    try:
        entries = [
            ContactEntry(
                id=contact.id,
                type=contact.type,
                label=form.get(f"label_{contact.id}", contact.label or "").strip() or None,
                value=form.get(f"value_{contact.id}", contact.value).strip(),
            )
            for contact in list_contacts(context.db, restaurant.id)
        ]
        new_value = form.get("new_value", "").strip()
        if new_value:
            entries.append(
                ContactEntry(
                    type=form.get("new_type", "phone"),
                    label=form.get("new_label", "").strip() or None,
                    value=new_value,
                )
            )
    except ValidationError:
        return admin_location_page(request, context, error="Every contact needs a value and a known type.")
    rows = save_contacts(context.db, restaurant.id, entries)
    record_audit(
        context,
        action_type="UPDATE",
        entity_type="Contact",
        after={"contacts": [ContactRead.model_validate(row).model_dump(mode="json") for row in rows]},
    )
    return RedirectResponse(url="/admin/location?message=Location+saved", status_code=303)


@app.get("/admin/menu", response_class=HTMLResponse)
def admin_menu_page(request: Request, context: RequestContext = Depends(get_request_context), error: str | None = None):
    restaurant = _restaurant_or_none(context)
    return render_template(
        request,
        "admin/menu.html",
        {
            "restaurant": restaurant,
            "menus": menu_service.list_menus(context.db, restaurant.id) if restaurant else [],
            "sections": menu_service.get_menu_sections(context.db, restaurant.id) if restaurant else [],
            "error": error,
            "message": request.query_params.get("message"),
        },
    )


def _parse_price(raw: str) -> float | None:
    """Empty means no price; raises ValueError for anything non-numeric or negative."""
    cleaned = raw.strip()
    if not cleaned:
        return None
    price = float(cleaned)
    if price < 0:
        raise ValueError("negative price")
    return price


def _menu_redirect(message: str) -> RedirectResponse:
    return RedirectResponse(url=f"/admin/menu?message={quote_plus(message)}", status_code=303)


@app.post("/admin/menus", response_class=RedirectResponse)
async def admin_menu_create(request: Request, context: RequestContext = Depends(get_request_context)):
    if context.identity is None or not context.identity.can_write_content:
        return _forbidden_page(request)
    restaurant = _restaurant_or_none(context)
    if restaurant is None:
        raise HTTPException(status_code=404, detail="Restaurant not found")
    form = await _form_data(request)
    name = form.get("name", "").strip()
    if not name:
        return admin_menu_page(request, context, error="Menu name is required.")
    menu = menu_service.create_menu(
        context.db,
        restaurant_id=restaurant.id,
        name=name,
        description=form.get("description", "").strip() or None,
        is_active=form.get("is_active") in TRUE_VALUES,
    )
    record_audit(
        context,
        action_type="CREATE",
        entity_type="Menu",
        entity_id=menu.id,
        after=MenuSummary.model_validate(menu).model_dump(mode="json"),
    )
    return _menu_redirect("Menu created")


@app.post("/admin/menus/{menu_id}/activate", response_class=RedirectResponse)
def admin_menu_activate(request: Request, menu_id: int, context: RequestContext = Depends(get_request_context)):
    if context.identity is None or not context.identity.can_write_content:
        return _forbidden_page(request)
    restaurant = _restaurant_or_none(context)
    if restaurant is None or menu_service.activate_menu(context.db, restaurant.id, menu_id) is None:
        raise HTTPException(status_code=404, detail="Menu not found")
    record_audit(context, action_type="ACTIVATE", entity_type="Menu", entity_id=menu_id)
    return _menu_redirect("Menu activated")


@app.post("/admin/menu/sections", response_class=RedirectResponse)
async def admin_section_create(request: Request, context: RequestContext = Depends(get_request_context)):
    if context.identity is None or not context.identity.can_write_content:
        return _forbidden_page(request)
    restaurant = _restaurant_or_none(context)
    form = await _form_data(request)
    name = form.get("name", "").strip()
    try:
        menu_id = int(form.get("menu_id", ""))
        sort_order = int(form.get("sort_order", "0") or 0)
    except ValueError:
        return admin_menu_page(request, context, error="Pick a menu and a numeric sort order.")
    menus = {menu.id for menu in menu_service.list_menus(context.db, restaurant.id)} if restaurant else set()
    if not name or menu_id not in menus:
        return admin_menu_page(request, context, error="Section name and menu are required.")
    section = menu_service.create_menu_section(
        context.db,
        menu_id=menu_id,
        name=name,
        description=form.get("description", "").strip() or None,
        sort_order=sort_order,
    )
    record_audit(
        context,
        action_type="CREATE",
        entity_type="MenuSection",
        entity_id=section.id,
        after={"menuId": menu_id, "name": section.name, "sortOrder": section.sort_order},
    )
    return _menu_redirect("Section created")


@app.post("/admin/menu/items", response_class=RedirectResponse)
async def admin_item_create(request: Request, context: RequestContext = Depends(get_request_context)):
    if context.identity is None or not context.identity.can_write_content:
        return _forbidden_page(request)
    restaurant = _restaurant_or_none(context)
    form = await _form_data(request)
    name = form.get("name", "").strip()
    try:
        section_id = int(form.get("section_id", ""))
        price = _parse_price(form.get("price", ""))
    except ValueError:
        return admin_menu_page(request, context, error="Price must be a non-negative number.")
    if restaurant is None or menu_service.get_section_for_restaurant(context.db, section_id, restaurant.id) is None:
        raise HTTPException(status_code=404, detail="Menu section not found")
    if not name:
        return admin_menu_page(request, context, error="Item name is required.")
    item = menu_service.create_menu_item(
        context.db,
        section_id=section_id,
        name=name,
        description=form.get("description", "").strip() or None,
        price=price,
        is_available=form.get("is_available", "on") in TRUE_VALUES,
    )
    record_audit(
        context,
        action_type="CREATE",
        entity_type="MenuItem",
        entity_id=item.id,
        after=menu_service.snapshot_item(item),
    )
    return _menu_redirect("Item created")


def _update_item_with_audit(context: RequestContext, restaurant_id: int, item_id: int, changes: dict) -> None:
    existing = menu_service.get_menu_item(context.db, item_id, restaurant_id)
    if existing is None:
        raise HTTPException(status_code=404, detail="Menu item not found")
    before = menu_service.snapshot_item(existing)
    item = menu_service.update_menu_item(context.db, item_id, restaurant_id, changes)
    if item is None:
        raise HTTPException(status_code=404, detail="Menu item not found")
    record_audit(
        context,
        action_type="UPDATE",
        entity_type="MenuItem",
        entity_id=item.id,
        before=before,
        after=menu_service.snapshot_item(item),
    )


@app.post("/admin/menu/items/{item_id}", response_class=RedirectResponse)
async def admin_item_update(request: Request, item_id: int, context: RequestContext = Depends(get_request_context)):
    if context.identity is None or not context.identity.can_write_content:
        return _forbidden_page(request)
    restaurant = _restaurant_or_none(context)
    if restaurant is None:
        raise HTTPException(status_code=404, detail="Menu item not found")
    form = await _form_data(request)
    name = form.get("name", "").strip()
    if not name:
        return admin_menu_page(request, context, error="Item name is required.")
    try:
        changes = {
            "name": name,
            "description": form.get("description", "").strip() or None,
            "price": _parse_price(form.get("price", "")),
            "is_available": form.get("is_available") in TRUE_VALUES,
        }
        if form.get("sort_order", "").strip():
            changes["sort_order"] = int(form["sort_order"])
    except ValueError:
        return admin_menu_page(request, context, error="Price and sort order must be numbers.")
    _update_item_with_audit(context, restaurant.id, item_id, changes)
    return _menu_redirect("Item saved")


@app.post("/admin/menu/items/{item_id}/toggle", response_class=RedirectResponse)
def admin_item_toggle(request: Request, item_id: int, context: RequestContext = Depends(get_request_context)):
    if context.identity is None or not context.identity.can_write_content:
        return _forbidden_page(request)
    restaurant = _restaurant_or_none(context)
    item = menu_service.get_menu_item(context.db, item_id, restaurant.id) if restaurant else None
    if item is None:
        raise HTTPException(status_code=404, detail="Menu item not found")
    _update_item_with_audit(context, restaurant.id, item_id, {"is_available": not item.is_available})
    return _menu_redirect("Availability updated")

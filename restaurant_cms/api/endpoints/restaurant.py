"""Public restaurant aggregate endpoint."""

from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from restaurant_cms.api.responses import internal_error
from restaurant_cms.auth import RequestContext, get_request_context
from restaurant_cms.services.restaurant_service import get_restaurant_data

router: APIRouter = APIRouter()


@router.get("/restaurant")
def read_restaurant(context: RequestContext = Depends(get_request_context)) -> JSONResponse:
    """Return the tenant aggregate, or ``{}`` when the tenant does not exist."""
    try:
        data = get_restaurant_data(context.db, context.restaurant_slug)
    except Exception:
        return internal_error("Failed to load restaurant data")
    if data is None:
        return JSONResponse(content={})
    return JSONResponse(content=jsonable_encoder(data, by_alias=True))

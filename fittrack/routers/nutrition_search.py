import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, status

from fittrack.services.auth_middleware import get_current_user
from fittrack.services.usda import fetch_food, search_foods
from fittrack.utils.response import create_response, handle_exception

router = APIRouter(
    prefix="/api/nutrition-search",
    tags=["Nutrition"],
    dependencies=[Depends(get_current_user)],
)
logger = logging.getLogger(__name__)


@router.get("")
async def nutrition_search(
    q: str | None = Query(None, max_length=200),
    fdc_id: int | None = Query(None, alias="fdcId", ge=1),
):
    try:
        if fdc_id is None and not (q and q.strip()):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail='Query parameter "q" or "fdcId" is required',
            )
        if fdc_id is not None:
            data = await fetch_food(fdc_id)
            message = "Food details fetched"
        else:
            data = await search_foods(q)
            message = "Search results fetched"
        return create_response(message=message, data=data, status_code=status.HTTP_200_OK)
    except (httpx.HTTPStatusError, httpx.RequestError) as exc:
        logger.warning("USDA request failed: %s", exc)
        return create_response(
            "Failed to fetch nutrition data",
            None,
            status.HTTP_502_BAD_GATEWAY,
            status_text="error",
        )
    except Exception as exc:
        return handle_exception(exc, fallback_message="Failed to fetch nutrition data")

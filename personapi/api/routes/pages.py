from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, PlainTextResponse

from personapi.api.deps import get_settings
from personapi.core.config import Settings

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def landing_page(settings: Settings = Depends(get_settings)):
    current_time = datetime.now(timezone.utc).isoformat()
    return HTMLResponse(
        f"Python-FastAPI {settings.GREETING_TEXT} <br> Current UTC time: {current_time}"
    )


@router.get("/health", response_class=PlainTextResponse)
async def health():
    return PlainTextResponse("OK")

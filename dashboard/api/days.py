import logging

from fastapi import APIRouter, Depends, HTTPException, status

from dashboard.core.notion_store import NotionDayStore
from dashboard.dependencies import get_day_store, verify_client_key
from models.enums import UpsertOutcome
from shared.models import HealthCheck, LoadDaysResponse, SaveDayRequest, SaveDayResponse
from utils.validators import is_valid_date

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["days"])

@router.get("/health", response_model=HealthCheck)
async def health():
    return HealthCheck(ok=True)

@router.get("/loadDays", response_model=LoadDaysResponse, dependencies=[Depends(verify_client_key)])
async def load_days(day_store: NotionDayStore = Depends(get_day_store)):
    """
    Все дни из базы документов
    """
    try:
        days = await day_store.load_days()
    except Exception as e:
        logger.exception("❌ Failed to load days")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail=str(e) or "Failed to load")
    # Страницы с некорректной датой не должны ломать весь ответ
    return {"days": [day for day in days if is_valid_date(day["date"])]}

@router.post("/saveDay", response_model=SaveDayResponse, response_model_exclude_none=True,
             dependencies=[Depends(verify_client_key)])
async def save_day(body: SaveDayRequest, day_store: NotionDayStore = Depends(get_day_store)):
    """
    Создать или обновить запись дня по дате
    """
    if not body.date or body.checks is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing date/checks")
    if not is_valid_date(body.date):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid date")

    try:
        outcome, page_id = await day_store.save_day(body.date, body.normalized_checks())
    except Exception as e:
        logger.exception(f"❌ Failed to save day {body.date}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail=str(e) or "Failed to save")

    if outcome == UpsertOutcome.UPDATED:
        return SaveDayResponse(updated=True, pageId=page_id)
    return SaveDayResponse(created=True, pageId=page_id)

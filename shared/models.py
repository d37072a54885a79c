from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Optional

from utils.validators import is_valid_date

# Модели обмена между клиентом трекера и прокси

class HealthCheck(BaseModel):
    ok: bool = True

class DayPayload(BaseModel):
    date: str
    checks: Dict[str, bool] = {}

    @field_validator('date')
    @classmethod
    def validate_date(cls, v):
        if not is_valid_date(v):
            raise ValueError('date должна быть в формате YYYY-MM-DD')
        return v

class SaveDayRequest(BaseModel):
    # Поля необязательны: отсутствие проверяется в обработчике (400, не 422)
    date: Optional[str] = None
    checks: Optional[Dict[str, Any]] = None

    def normalized_checks(self) -> Dict[str, bool]:
        return {str(k): bool(v) for k, v in (self.checks or {}).items()}

class SaveDayResponse(BaseModel):
    created: Optional[bool] = None
    updated: Optional[bool] = None
    pageId: str = Field(..., description="ID страницы в базе документов")

class LoadDaysResponse(BaseModel):
    days: List[DayPayload] = []

# =======================================================================================
# nfc_checkin/api/routes/dashboard.py - Audit Trail and Analytics
# =======================================================================================
from typing import Optional
from fastapi import APIRouter, Depends, Query
from ...models.schemas import AnalyticsResponse, EventsResponse, Summary
from ...services.access_ledger import AccessLedger
from ...utils.identifiers import normalize
from ..dependencies import get_ledger

router = APIRouter()


@router.get("/events", response_model=EventsResponse)
def get_events(
    limit: int = Query(100, ge=1, le=1000),
    after: Optional[int] = Query(None, ge=0, description="Only events with a larger sequence"),
    identifier: Optional[str] = Query(None),
    ledger: AccessLedger = Depends(get_ledger),
):
    key = normalize(identifier).value if identifier else None
    return EventsResponse(events=ledger.list_events(limit, after_sequence=after, identifier=key))


@router.get("/analytics", response_model=AnalyticsResponse)
def get_analytics(ledger: AccessLedger = Depends(get_ledger)):
    return AnalyticsResponse(summary=Summary(**ledger.summary()))

# =======================================================================================
# nfc_checkin/api/routes/scan.py - Scan Endpoints
# =======================================================================================
from fastapi import APIRouter, Depends
from ...models.schemas import AccessEvent, ScanRequest
from ...services.terminal import CheckinTerminal
from ..dependencies import get_terminal

router = APIRouter()

@router.post("/scan", response_model=AccessEvent)
def handle_scan(request: ScanRequest, terminal: CheckinTerminal = Depends(get_terminal)):
    """
    Process an NFC scan. Always 200: denials and storage errors are
    reported through event_type, so the response is the audit record itself.
    """
    return terminal.submit_scan(request.identifier)

# =======================================================================================
# nfc_checkin/api/routes/employees.py - Employee Registration Endpoints
# =======================================================================================
import io
from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from ...models.schemas import (
    EmployeeListResponse,
    EmployeeRecord,
    ImportResponse,
    RegisterRequest,
    RegistrationResult,
)
from ...services.registry_store import RegistryStore
from ...services.terminal import CheckinTerminal
from ...utils.identifiers import normalize
from ..dependencies import get_registry, get_terminal

router = APIRouter()


@router.post("/employees", response_model=RegistrationResult, status_code=status.HTTP_201_CREATED)
def register_employee(request: RegisterRequest, terminal: CheckinTerminal = Depends(get_terminal)):
    """Register a card against an employee. 409 if the card is already registered."""
    return terminal.submit_registration(
        request.identifier, request.name, request.role,
        allow_synthetic=request.allow_synthetic,
    )


@router.get("/employees", response_model=EmployeeListResponse)
def list_employees(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    registry: RegistryStore = Depends(get_registry),
):
    return EmployeeListResponse(employees=registry.list_employees(skip, limit))


@router.get("/employees/{identifier}", response_model=EmployeeRecord)
def lookup_employee(identifier: str, registry: RegistryStore = Depends(get_registry)):
    return registry.get(normalize(identifier))


@router.post("/employees/import", response_model=ImportResponse)
def import_employees(file: UploadFile = File(...), registry: RegistryStore = Depends(get_registry)):
    """
    CSV import: headers = identifier,name,role
    Example line: 04:A2:3B:91,Ana Ruiz,Cashier
    """
    try:
        text_stream = io.StringIO(file.file.read().decode("utf-8-sig"))
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="Invalid CSV encoding")
    return ImportResponse(**registry.import_from_csv(text_stream))

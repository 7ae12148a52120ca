from typing import Any, Dict, Literal, Optional, get_args

from modules.shared.models import CamelModel

RequestType = Literal["leave", "ta", "proposal", "report", "recruitment", "certificate"]
RequestStatus = Literal["pending", "approved", "rejected", "signed", "forwarded"]
SignatureStatus = Literal["pending", "signed", "rejected"]
RequestActionType = Literal["approve", "reject", "sign"]

REQUEST_TYPES = set(get_args(RequestType))
REQUEST_ACTIONS = set(get_args(RequestActionType))
# Tickets in these states no longer accept actions
CLOSED_STATUSES = {"approved", "rejected", "signed"}
ALL_TARGETS = "all"


class UploadedFile(CamelModel):
    name: str
    size: int
    type: str
    base64: str
    uploaded_at: str


class RequestItem(CamelModel):
    id: str
    type: RequestType
    title: str
    created_by: str
    created_by_id: Optional[str] = None
    created_by_role: Optional[str] = None
    created_by_designation: Optional[str] = None
    payload: Dict[str, Any]
    target: str
    status: RequestStatus = "pending"
    created_at: str
    updated_at: Optional[str] = None
    forwarded_to: Optional[str] = None
    uploaded_file: Optional[UploadedFile] = None
    signature_from: Optional[str] = None
    signature_status: Optional[SignatureStatus] = None


class RequestCreate(CamelModel):
    type: Optional[str] = None
    title: Optional[str] = None
    created_by: Optional[str] = None
    created_by_id: Optional[str] = None
    created_by_role: Optional[str] = None
    created_by_designation: Optional[str] = None
    payload: Optional[Dict[str, Any]] = None
    target: Optional[str] = None
    uploaded_file: Optional[UploadedFile] = None
    signature_from: Optional[str] = None


class RequestAction(CamelModel):
    action: Optional[str] = None
    request_id: Optional[str] = None

from fastapi.responses import JSONResponse
from pydantic import BaseModel

import uuid
import decimal
from datetime import datetime


def serialize_data(obj):
    if isinstance(obj, BaseModel):
        return serialize_data(obj.model_dump(by_alias=True, exclude_none=True))
    elif isinstance(obj, dict):
        return {k: serialize_data(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [serialize_data(item) for item in obj]
    elif isinstance(obj, uuid.UUID):
        return str(obj)
    elif isinstance(obj, decimal.Decimal):
        return float(obj)
    elif isinstance(obj, datetime):
        return obj.isoformat()
    else:
        return obj


def success_response(data=None, status_code=200, include_flag=True):
    """Return standardized success response"""
    content = serialize_data(data or {})
    if include_flag:
        content = {"success": True, **content}
    return JSONResponse(status_code=status_code, content=content)


def error_response(message, status_code=400):
    """Return standardized error response"""
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": message,
        }
    )


def internal_error_response(message="Internal server error"):
    """Generic 500, never carries exception detail"""
    return error_response(message, 500)

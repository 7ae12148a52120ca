import sys
import os
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from modules.shared.config import get_settings, validate_settings
from modules.shared.response import error_response
from modules.shared.seed import seed_users
from modules.auth.router import router as auth_router
from modules.users.router import router as users_router
from modules.users.store import get_user_store
from modules.tickets.router import router as tickets_router
from modules.inquiries.router import router as inquiries_router
from modules.ledger.router import router as ledger_router

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Staff Portal API")

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth_router, prefix="/api/auth")
app.include_router(users_router, prefix="/api/admin/users")
app.include_router(tickets_router, prefix="/api/requests")
app.include_router(inquiries_router, prefix="/api")
app.include_router(ledger_router, prefix="/api/company-ledger")


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are client errors, reported without the parser detail"""
    locations = [err.get("loc") for err in exc.errors()]
    logger.warning(f"Invalid request body for {request.method} {request.url.path}: {locations}")
    return error_response("Invalid request body", 400)


@app.on_event("startup")
async def startup_event():
    """Check configuration and seed demo users on startup"""
    validate_settings(settings)
    if settings.seed_demo_users:
        await seed_users(get_user_store())


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from passlib.context import CryptContext
from jose import JWTError, jwt

# Configure logging
logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
ALGORITHM = "HS256"
RESET_TOKEN_TTL = timedelta(hours=1)


def hash_password(password: str) -> str:
    """Hash password using bcrypt"""
    logger.debug("Hashing password.")
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash"""
    logger.debug("Verifying password.")
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Malformed or unknown hash format on record
        logger.warning("Stored password hash could not be parsed.")
        return False


def create_access_token(data: dict, secret: str, expires_delta: timedelta = timedelta(hours=24)) -> str:
    """Create JWT token"""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode.update({"exp": expire})
    token = jwt.encode(to_encode, secret, algorithm=ALGORITHM)
    logger.debug(f"Access token created for sub={data.get('sub')}. Expires at: {expire}")
    return token


def decode_token(token: str, secret: str) -> Optional[dict]:
    """Decode JWT token"""
    try:
        return jwt.decode(token, secret, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"Failed to decode token: {e}")
        return None


def generate_reset_token() -> str:
    """Generate a secure random token for password reset"""
    return secrets.token_urlsafe(32)

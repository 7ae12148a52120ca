import logging

from modules.auth.utils import hash_password
from modules.shared.utils import generate_id, to_iso, utc_now
from modules.users.models import User
from modules.users.store import UserStore

# Configure logging
logger = logging.getLogger(__name__)

# username, email, password, role, full name, designation
DEMO_USERS = [
    ("founder", "founder@example.com", "founder123", "founder", "Demo Founder", "Founder"),
    ("admin", "admin@example.com", "admin123", "admin", "Demo Administrator", "Administrator"),
    ("teamlead", "teamlead@example.com", "teamlead123", "user", "Demo Team Lead", "Technical Team Head"),
    ("employee", "employee@example.com", "employee123", "user", "Demo Employee", "Employee"),
    ("intern", "intern@example.com", "intern123", "user", "Demo Intern", "Technical Intern"),
]


async def seed_users(store: UserStore) -> int:
    """Seed demo accounts if the user table is empty. Returns the number added."""
    logger.info("Starting user seeding process.")
    if await store.get_all_users():
        logger.info("Users file is not empty. Skipping user seeding.")
        return 0

    created_at = to_iso(utc_now())
    for username, email, password, role, full_name, designation in DEMO_USERS:
        user = User(
            id=generate_id(role),
            username=username,
            email=email,
            password_hash=hash_password(password),
            role=role,
            full_name=full_name,
            designation=designation,
            status="active",
            email_verified=True,
            created_at=created_at,
        )
        await store.add_user(user)
        logger.info(f"User '{username}' seeded with ID: {user.id}")
    logger.info(f"Seeded {len(DEMO_USERS)} demo users.")
    return len(DEMO_USERS)

import logging
import os
from sqlalchemy import select
from taskportal.db.session import SessionLocal
from taskportal.models.user import User
from taskportal.core.security import hash_password

logger = logging.getLogger(__name__)

SAMPLE_STAFF = [
    ("john_pm", "pm123", "project_manager"),
    ("sarah_mb", "mb123", "media_buyer"),
    ("mike_gd", "gd123", "graphic_design"),
]

def _ensure_user(db, username: str, password: str, role: str, position: str | None = None) -> bool:
    existing = db.execute(select(User).where(User.username == username)).scalar_one_or_none()
    if existing:
        return False
    db.add(User(username=username, password_hash=hash_password(password), role=role, position=position))
    return True

def seed(db) -> list[str]:
    username = os.environ.get("SEED_ADMIN_USER", "admin")
    password = os.environ.get("SEED_ADMIN_PASS", "admin123")

    created = []
    if _ensure_user(db, username, password, "admin"):
        created.append(username)
    for name, pw, position in SAMPLE_STAFF:
        if _ensure_user(db, name, pw, "staff", position):
            created.append(name)
    db.commit()
    return created

def main():
    logging.basicConfig(level=logging.INFO)
    db = SessionLocal()
    try:
        for name in seed(db):
            logger.info("created user %s", name)
    finally:
        db.close()

if __name__ == "__main__":
    main()

from __future__ import annotations

import structlog
from sqlalchemy.orm import Session

from .core.config import settings
from .core.database import SessionLocal, init_db
from .core.logging import configure_logging
from .models import User
from .services.credential_service import CredentialManager

logger = structlog.get_logger(__name__)

DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "demo-password"


def seed() -> None:
    init_db()
    db: Session = SessionLocal()
    try:
        user = db.query(User).filter_by(email=DEMO_EMAIL).first()
        if not user:
            user = User(name="Demo User", email=DEMO_EMAIL)
            CredentialManager().set_password(user, DEMO_PASSWORD)
            db.add(user)
            db.commit()
            logger.info("demo_user_created", user_id=user.id)
        else:
            logger.info("demo_user_exists", user_id=user.id)
    finally:
        db.close()


if __name__ == "__main__":
    configure_logging(settings)
    seed()

# icebreaker/db/init_db.py
import argparse
import logging

from sqlalchemy.orm import Session

from icebreaker import models  # noqa
from icebreaker.core.config import settings
from icebreaker.core.logging_config import setup_logging
from icebreaker.core.security import ensure_admin, get_admin_by_username
from icebreaker.db.base import Base
from icebreaker.db.seed_data import CATALOG
from icebreaker.db.session import SessionLocal, engine
from icebreaker.models.admin import Admin
from icebreaker.models.category import Category
from icebreaker.models.question import Question

logger = logging.getLogger(__name__)


def seed_questions(db: Session, catalog: dict = CATALOG) -> int:
    """
    Load the question catalog into an empty database. Returns how many
    questions were added (0 when categories already exist).
    """
    if db.query(Category).first() is not None:
        return 0

    added = 0
    for role, categories in catalog.items():
        for name, texts in categories:
            category = Category(role=role, name=name)
            db.add(category)
            db.flush()
            for text in texts:
                db.add(Question(category_id=category.id, question_text=text, is_active=True))
                added += 1
    db.commit()
    logger.info(f"Seeded {added} questions")
    return added


def seed_admin(db: Session) -> Admin | None:
    if settings.ADMIN_PASSWORD is None:
        logger.warning("ADMIN_PASSWORD not set, skipping default admin")
        return None
    if db.query(Admin).first() is not None:
        return get_admin_by_username(db, settings.ADMIN_USERNAME)
    admin = ensure_admin(db, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)
    logger.info(f"Created admin {admin.username}")
    return admin


def init_db() -> None:
    Base.metadata.create_all(bind=engine)
    if not settings.SEED_ON_STARTUP:
        return
    db = SessionLocal()
    try:
        seed_questions(db)
        seed_admin(db)
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Create tables, seed questions, set admin password")
    parser.add_argument("--admin-username", default=settings.ADMIN_USERNAME)
    parser.add_argument("--admin-password", default=None)
    args = parser.parse_args()

    setup_logging()
    init_db()

    if args.admin_password:
        db = SessionLocal()
        try:
            admin = ensure_admin(db, args.admin_username, args.admin_password)
            logger.info(f"Admin {admin.username} is ready")
        finally:
            db.close()


if __name__ == "__main__":
    main()

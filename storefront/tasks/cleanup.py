# storefront/tasks/cleanup.py
from datetime import datetime, timezone

from storefront.celery_worker import celery_app
from storefront.data.database import SessionLocal
from storefront.repos.user_repo import UserRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def purge_expired_reset_tokens(db) -> int:
    now = datetime.now(timezone.utc)
    cleared = UserRepo(db).clear_expired_reset_tokens(now)
    logger.info(f"Cleared {cleared} expired password reset tokens")
    return cleared


@celery_app.task(name="storefront.tasks.cleanup.purge_expired_reset_tokens_task")
def purge_expired_reset_tokens_task():
    logger.info("Purge expired reset tokens task started")

    db = SessionLocal()
    try:
        return purge_expired_reset_tokens(db)
    finally:
        db.close()

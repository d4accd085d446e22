# storefront/celery_worker.py
from celery import Celery

from storefront.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND

celery_app = Celery(
    "storefront",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# taski importowane jawnie, zeby worker je zarejestrowal
celery_app.conf.imports = (
    "storefront.tasks.cleanup",
    "storefront.services.notification_service",
)

celery_app.conf.beat_schedule = {
    "purge-expired-reset-tokens-hourly": {
        "task": "storefront.tasks.cleanup.purge_expired_reset_tokens_task",
        "schedule": 60.0 * 60,
    },
}

celery_app.conf.timezone = "UTC"

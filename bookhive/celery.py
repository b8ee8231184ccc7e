# bookhive/celery.py
import os
import logging

from celery import Celery
from celery.signals import task_failure

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "bookhive.settings")

logger = logging.getLogger(__name__)

app = Celery("bookhive")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks(["notifications"])


@task_failure.connect
def log_task_failure(sender=None, task_id=None, exception=None, **kwargs):
    # Broadcast tasks give up after their last retry
    logger.error(
        "Task %s (%s) failed permanently: %s",
        getattr(sender, "name", sender),
        task_id,
        exception,
    )

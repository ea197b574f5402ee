# pcstore/celery_worker.py
from celery import Celery

from pcstore.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND, CELERY_TASK_ALWAYS_EAGER

celery_app = Celery(
    "pcstore",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# taski muszą być zaimportowane, żeby worker je zarejestrował
celery_app.conf.imports = (
    "pcstore.services.notification_service",
)

celery_app.conf.timezone = "UTC"

#w testach / lokalnie bez brokera taski wykonują się od razu
celery_app.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER
celery_app.conf.task_eager_propagates = CELERY_TASK_ALWAYS_EAGER

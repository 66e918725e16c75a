"""
Configuração do Celery para o back office de pedidos.

O módulo DJANGO_SETTINGS_MODULE é definido antes da instanciação da app,
garantindo que o Celery leia as settings do Django (prefixo CELERY_).
O beat agenda ``core.publish_outbox_events`` para drenar o outbox.
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("delivery")

app.config_from_object("django.conf:settings", namespace="CELERY")

app.autodiscover_tasks()

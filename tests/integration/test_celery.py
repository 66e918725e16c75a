"""Testes de integração para configuração do Celery."""

import pytest

pytestmark = pytest.mark.integration


@pytest.fixture(autouse=True)
def _celery_eager(settings):
    """Executa tasks de forma síncrona no processo de teste."""
    settings.CELERY_TASK_ALWAYS_EAGER = True
    settings.CELERY_TASK_EAGER_PROPAGATES = True


class TestCeleryConfig:
    """Verifica que o Celery carrega corretamente via Django."""

    def test_celery_app_is_importable(self):
        from config.celery import app

        assert app.main == "delivery"

    def test_celery_app_exported_from_init(self):
        from config import celery_app

        assert celery_app.main == "delivery"

    def test_celery_broker_url_configured(self, settings):
        assert settings.CELERY_BROKER_URL is not None
        assert "redis" in settings.CELERY_BROKER_URL

    def test_celery_serializer_is_json(self, settings):
        assert settings.CELERY_TASK_SERIALIZER == "json"
        assert settings.CELERY_RESULT_SERIALIZER == "json"
        assert settings.CELERY_ACCEPT_CONTENT == ["json"]

    def test_celery_timezone_matches_django(self, settings):
        assert settings.CELERY_TIMEZONE == settings.TIME_ZONE

    def test_outbox_publisher_is_scheduled(self, settings):
        entry = settings.CELERY_BEAT_SCHEDULE["publish-outbox-events"]
        assert entry["task"] == "core.publish_outbox_events"
        assert entry["schedule"] > 0

    def test_tasks_are_registered(self):
        import modules.core.tasks  # noqa: F401
        from config.celery import app

        assert "core.debug_task" in app.tasks
        assert "core.publish_outbox_events" in app.tasks


class TestTasksRunEager:
    """Verifica execução das tasks em modo eager."""

    def test_debug_task_returns_success(self):
        from modules.core.tasks import debug_task

        result = debug_task.apply()
        assert result.successful()
        assert result.get()["status"] == "ok"

    def test_publish_outbox_events_drains_queue(self, make_order):
        from modules.core.models import EventStatus, OutboxEvent
        from modules.core.tasks import publish_outbox_events

        make_order()
        result = publish_outbox_events.apply()

        assert result.get() == {"published": 1, "failed": 0}
        assert OutboxEvent.objects.get().status == EventStatus.PUBLISHED

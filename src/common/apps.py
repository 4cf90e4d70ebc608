import logging
import logging.handlers
import typing as t

import structlog
from django.apps import AppConfig


class CommonConfig(AppConfig):
    """Configuration for the common app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "common"
    queue_listener: logging.handlers.QueueListener | None = None

    def ready(self) -> None:
        """Start the background Loki shipper once Django is loaded."""
        self._start_queue_listener()

    def _start_queue_listener(self) -> None:
        """Start the QueueListener that forwards queued log records to Loki.

        Runs in a background thread so request threads never wait on Loki.
        """
        from django.conf import settings

        if not getattr(settings, "ENABLE_OBSERVABILITY", False):
            return

        logging_config = t.cast(dict[str, t.Any], settings.LOGGING)
        handlers = logging_config.get("handlers", {})
        loki_handler_config = handlers.get("loki")
        if not handlers.get("queue") or not loki_handler_config:
            return

        queue_handler = next(
            (h for h in logging.getLogger().handlers if isinstance(h, logging.handlers.QueueHandler)),
            None,
        )
        if not queue_handler:
            return

        from logging_loki import LokiHandler

        class GracefulLokiHandler(LokiHandler):  # type: ignore[misc]
            """LokiHandler that drops records when Loki is unreachable."""

            def handleError(self, record: logging.LogRecord) -> None:
                pass

        loki_handler = GracefulLokiHandler(
            url=loki_handler_config["url"],
            tags=loki_handler_config["tags"],
            version=loki_handler_config["version"],
        )

        self.queue_listener = logging.handlers.QueueListener(
            queue_handler.queue,
            loki_handler,
            respect_handler_level=True,
        )
        self.queue_listener.start()

        structlog.get_logger(__name__).info(
            "loki_queue_listener_started",
            queue_maxsize=getattr(queue_handler.queue, "maxsize", None),
        )

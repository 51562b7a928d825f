# =============================================================================
# lib/log_handler.py - Database Log Handler
# =============================================================================
# A logging.Handler that persists ERROR records into the `logs` table.
# Bug monitoring reads this table to find recurring error patterns.
#
# Installed once at app startup (see app/main.py):
#   install_database_log_handler()
# =============================================================================

import logging
import threading
from datetime import datetime, timezone

from app.config import settings

# Loggers whose records must never be written back to Supabase: the
# handler's own insert goes through them and would recurse.
_EXCLUDED_LOGGERS = ("lib.supabase_client", "lib.log_handler", "httpx", "httpcore", "hpack", "postgrest", "supabase")


class SupabaseLogHandler(logging.Handler):
    """Write log records to the `logs` table."""

    def __init__(self, level: int = logging.ERROR, source: str = "api"):
        super().__init__(level)
        self.source = source
        self._local = threading.local()

    def _should_skip(self, record: logging.LogRecord) -> bool:
        if getattr(self._local, "emitting", False):
            return True
        return record.name.startswith(_EXCLUDED_LOGGERS)

    def build_row(self, record: logging.LogRecord) -> dict:
        context = {
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info and record.exc_info[1] is not None:
            context["exception"] = repr(record.exc_info[1])

        return {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "message": record.getMessage(),
            "context": context,
            "source": self.source,
        }

    def emit(self, record: logging.LogRecord) -> None:
        if self._should_skip(record):
            return

        from lib.supabase_client import SupabaseClient

        self._local.emitting = True
        try:
            SupabaseClient.insert_row("logs", self.build_row(record))
        except Exception:
            self.handleError(record)
        finally:
            self._local.emitting = False


def install_database_log_handler(source: str = "api") -> SupabaseLogHandler | None:
    """
    Attach a SupabaseLogHandler to the root logger.

    Does nothing when LOG_TO_DATABASE is off or a handler is already attached.
    """
    if not settings.LOG_TO_DATABASE:
        return None

    root = logging.getLogger()
    for handler in root.handlers:
        if isinstance(handler, SupabaseLogHandler):
            return handler

    handler = SupabaseLogHandler(source=source)
    root.addHandler(handler)
    return handler

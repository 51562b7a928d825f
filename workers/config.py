# =============================================================================
# workers/config.py - Celery Worker Configuration
# =============================================================================
# Settings specific to Celery workers, including the beat schedule that
# drives the periodic AI scans.
# =============================================================================

from celery.schedules import crontab

from app.config import settings


class CeleryConfig:
    """
    Celery configuration settings.

    These are applied to the Celery app via app.config_from_object().
    """

    # -------------------------------------------------------------------------
    # Broker Settings (Redis)
    # -------------------------------------------------------------------------

    broker_url = settings.REDIS_URL
    result_backend = settings.REDIS_URL

    # -------------------------------------------------------------------------
    # Task Settings
    # -------------------------------------------------------------------------

    # Acknowledge tasks after they complete (not before)
    task_acks_late = True

    # Only prefetch one task at a time
    worker_prefetch_multiplier = 1

    # Task results expire after 1 hour
    result_expires = 3600

    # AI scans make one model call per pattern/plan, so allow 10 minutes
    task_time_limit = 600
    task_soft_time_limit = 540

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    task_serializer = "json"
    result_serializer = "json"
    accept_content = ["json"]

    # -------------------------------------------------------------------------
    # Task Routing
    # -------------------------------------------------------------------------

    task_queues = {
        "default": {
            "exchange": "default",
            "routing_key": "default",
        },
        "ai_tasks": {
            "exchange": "ai_tasks",
            "routing_key": "ai_tasks",
        },
    }

    task_routes = {
        "workers.tasks.analyze_error_logs": {"queue": "ai_tasks"},
        "workers.tasks.analyze_user_feedback": {"queue": "ai_tasks"},
        "workers.tasks.generate_bug_summary_report": {"queue": "ai_tasks"},
        "workers.tasks.run_price_analysis": {"queue": "ai_tasks"},
    }

    task_default_queue = "default"

    # -------------------------------------------------------------------------
    # Beat Schedule
    # -------------------------------------------------------------------------

    beat_schedule = {
        "analyze-error-logs-hourly": {
            "task": "workers.tasks.analyze_error_logs",
            "schedule": crontab(minute=0),
            "args": ("last_hour",),
        },
        "analyze-user-feedback-daily": {
            "task": "workers.tasks.analyze_user_feedback",
            "schedule": crontab(minute=15, hour=2),
        },
        "bug-summary-report-daily": {
            "task": "workers.tasks.generate_bug_summary_report",
            "schedule": crontab(minute=0, hour=6),
        },
        "price-analysis-weekly": {
            "task": "workers.tasks.run_price_analysis",
            "schedule": crontab(minute=0, hour=3, day_of_week="monday"),
        },
    }

    # -------------------------------------------------------------------------
    # Retry Settings
    # -------------------------------------------------------------------------

    task_annotations = {
        "*": {
            "max_retries": 3,
            "default_retry_delay": 60,
        }
    }

    # -------------------------------------------------------------------------
    # Monitoring
    # -------------------------------------------------------------------------

    worker_send_task_events = True
    task_send_sent_event = True

    # -------------------------------------------------------------------------
    # Timezone
    # -------------------------------------------------------------------------

    timezone = "UTC"
    enable_utc = True

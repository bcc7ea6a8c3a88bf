import os
import logging
from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class QuestionServiceConfig(AppConfig):
    name = "question_service"
    default_auto_field = "django.db.models.BigAutoField"
    verbose_name = "Question Service"

    def ready(self):
        import sys
        from .lib.db import init_sqlalchemy, ensure_sqlalchemy_schema

        if settings.LOG_LEVEL_RAW != settings.LOG_LEVEL:
            logger.warning(f"Invalid LOG_LEVEL '{settings.LOG_LEVEL_RAW}', defaulting to INFO")

        # Environment flag for strict initialization
        strict_init = os.environ.get("SQLALCHEMY_INIT_STRICT", "True") == "True"

        try:
            init_sqlalchemy()

            # Optional auto-init schema (disabled by default)
            is_schema_command = "initsa" in sys.argv
            auto_init_enabled = os.environ.get("AUTO_INIT_SQLALCHEMY", "False") == "True"
            if not is_schema_command and auto_init_enabled:
                logger.info("Auto-initializing SQLAlchemy schema")
                ensure_sqlalchemy_schema(with_advisory_lock=True)

        except Exception as e:
            if strict_init:
                # Fail fast in production
                logger.error(f"SQLAlchemy initialization failed: {e}")
                raise
            logger.warning(f"SQLAlchemy initialization failed, continuing: {e}")

import multiprocessing
import os

# gunicorn -c gunicorn.conf.py question_service.wsgi:application
wsgi_app = "question_service.wsgi:application"

host = os.getenv("GUNICORN_HOST", "0.0.0.0")
port = os.getenv("GUNICORN_PORT", os.getenv("PORT", "8080"))
bind = f"{host}:{port}"
workers = int(os.getenv("GUNICORN_WORKERS", multiprocessing.cpu_count() * 2 + 1))
timeout = int(os.getenv("GUNICORN_TIMEOUT", "30"))
# Time in-flight requests get to finish after SIGTERM/SIGINT
graceful_timeout = int(os.getenv("GUNICORN_GRACEFUL_TIMEOUT", "5"))
keepalive = 5
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

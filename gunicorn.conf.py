# gunicorn -c gunicorn.conf.py afyaconnect.api.main:app

import multiprocessing
import os

bind = f"{os.getenv('HOST', '0.0.0.0')}:{os.getenv('PORT', '3001')}"

workers = int(os.getenv("WEB_CONCURRENCY", multiprocessing.cpu_count() * 2 + 1))
worker_class = "uvicorn.workers.UvicornWorker"

# Multipart uploads of two 5MB images can be slow on patient connections
timeout = int(os.getenv("GUNICORN_TIMEOUT", "120"))
graceful_timeout = 30
keepalive = 5

max_requests = 1000
max_requests_jitter = 50

accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()
access_log_format = (
    '{"status": %(s)s, "method": "%(m)s", "path": "%(U)s", '
    '"duration_us": %(D)s, "client": "%(h)s", "request_id": "%({x-request-id}o)s"}'
)

# Each worker creates and seeds the store in its own lifespan
preload_app = False
proc_name = "afyaconnect-api"

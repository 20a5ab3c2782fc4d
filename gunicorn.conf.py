"""Gunicorn config for the TermTable API."""
import os

# Bind to the platform's PORT or default 8000
bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Each worker keeps its own TermStore, so an upload is only visible to the
# worker that received it. Keep one worker when clients upload through
# POST /api/upload.
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.environ.get("WEB_CONCURRENCY", "1"))

timeout = 60

# Graceful timeout for shutdown
graceful_timeout = 30

keepalive = 65

# Logging
accesslog = "-"
errorlog = "-"
loglevel = "info"

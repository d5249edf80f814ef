"""Gunicorn config for deployment."""
import os

# Bind to the platform's PORT or the Data Engine default
bind = f"0.0.0.0:{os.environ.get('PORT', os.environ.get('DATA_ENGINE_PORT', '8080'))}"

# Uvicorn async worker. The dataset lives in process memory and POST /load
# replaces it only in the worker that served the request, so run ONE worker.
# Sync routes still run concurrently in that worker's thread pool.
worker_class = "uvicorn.workers.UvicornWorker"
workers = 1

# Loading a large CSV can take a while
timeout = 120

# Graceful timeout for shutdown
graceful_timeout = 30

keepalive = 65

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("DATA_ENGINE_LOG_LEVEL", "info").lower()

wsgi_app = "dataengine.main:app"

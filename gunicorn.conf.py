"""
Gunicorn configuration for MrLister production deployment.

Uses Uvicorn workers for async ASGI support. The in-memory storage
backend is process-local, so it runs a single worker; the SQL backend
scales out to several.
"""

import multiprocessing
import os

# ─── Server Socket ───────────────────────────────────────────
bind = f"0.0.0.0:{os.getenv('PORT', os.getenv('APP_PORT', '8000'))}"

# ─── Worker Processes ────────────────────────────────────────
worker_class = "uvicorn.workers.UvicornWorker"

if os.getenv("STORAGE_BACKEND", "memory").lower() == "sql":
    # Workers = (2 × CPU cores) + 1, capped at WEB_CONCURRENCY
    workers = min(multiprocessing.cpu_count() * 2 + 1, int(os.getenv("WEB_CONCURRENCY", "4")))
else:
    workers = 1

threads = 1

# ─── Timeouts ────────────────────────────────────────────────
# Exports and QR rendering are CPU-bound but short
timeout = int(os.getenv("GUNICORN_TIMEOUT", "60"))
graceful_timeout = 30
keepalive = 5

# ─── Worker Lifecycle ────────────────────────────────────────
# Recycling a memory-backend worker would drop its data
max_requests = int(os.getenv("GUNICORN_MAX_REQUESTS", "1000")) if workers > 1 else 0
max_requests_jitter = 50

preload_app = False  # async engines don't fork well

# ─── Logging ─────────────────────────────────────────────────
# structlog LoggingMiddleware logs requests; Gunicorn only forwards errors
accesslog = None
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# ─── Server Mechanics ────────────────────────────────────────
forwarded_allow_ips = "*"

import os

# Bind & workers
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
threads = 1
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr (collected by Docker)
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Proxy headers are handled by ProxyFix in the app
forwarded_allow_ips = "*"
proxy_protocol = False

wsgi_app = "boundary:create_app()"


def worker_exit(server, worker):
    """Return pooled database connections before the worker goes away."""
    app = getattr(worker, "wsgi", None)
    if app is None:
        return
    from boundary.core.database import shutdown

    shutdown(app)

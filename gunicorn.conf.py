import os

wsgi_app = "app.main:app"
bind = f"0.0.0.0:{os.getenv('PORT', 8000)}"
# SESSION_BACKEND=memory only works with a single worker
workers = int(os.getenv('WEB_CONCURRENCY', 1))
worker_class = "uvicorn.workers.UvicornWorker"
worker_connections = 1000
max_requests = 1000
max_requests_jitter = 100
timeout = int(os.getenv('GUNICORN_TIMEOUT', 120))
loglevel = os.getenv('LOG_LEVEL', 'info').lower()
accesslog = "-"
preload_app = True

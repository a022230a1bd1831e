"""
Gunicorn Configuration for the Family Registry
Production WSGI server settings

    gunicorn -c deployment/gunicorn_config.py
"""
import multiprocessing
import os

# Application
wsgi_app = "app:create_app('production')"

# Server Socket - nginx terminates TLS and proxies to this port
bind = f"127.0.0.1:{os.environ.get('PORT', '8000')}"
backlog = 512

# Worker Processes - one synchronous request per worker
workers = int(os.environ.get('GUNICORN_WORKERS', multiprocessing.cpu_count() + 1))
worker_class = 'sync'
max_requests = 1000
max_requests_jitter = 50
timeout = 60  # photo uploads on slow connections
keepalive = 5

# Logging
accesslog = os.environ.get('GUNICORN_ACCESS_LOG', 'logs/gunicorn_access.log')
errorlog = os.environ.get('GUNICORN_ERROR_LOG', 'logs/gunicorn_error.log')
loglevel = 'info'
access_log_format = '%(h)s %(t)s "%(r)s" %(s)s %(b)s %(D)s'

# Process Naming
proc_name = 'family-registry'

# Security
limit_request_line = 4094
limit_request_fields = 100
limit_request_field_size = 8190


def on_starting(server):
    """Make sure the log and upload folders exist before workers boot"""
    os.makedirs('logs', exist_ok=True)
    os.makedirs(os.environ.get('UPLOAD_FOLDER', 'uploads'), exist_ok=True)


def post_fork(server, worker):
    server.log.info("Worker spawned (pid: %s)", worker.pid)

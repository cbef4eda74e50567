"""
Service context extraction for logging.

Identifies which embedding process a log line came from, so logs of several
booking terminals can be told apart once collected.
"""

from functools import lru_cache
import os
import socket


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'cinema-booking')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Container hostnames are short random ids; fall back to PID locally
    hostname = os.getenv('HOSTNAME') or socket.gethostname()
    if deploy_env == 'local_dev' or not hostname:
        instance_id = str(os.getpid())
    else:
        instance_id = hostname[:12]

    return f'{service_name}@{deploy_env}:{instance_id}'

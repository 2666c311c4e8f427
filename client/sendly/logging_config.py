"""
Logging configuration for the Sendly client

The library itself only emits records through module loggers under the
'sendly' namespace. Applications that want a ready-made setup can call
setup_logging() once at startup.
"""

import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone

SENDLY_LOGGER = 'sendly'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _resolve_level(log_level):
    if isinstance(log_level, int):
        return log_level

    name = (log_level or os.environ.get('LOG_LEVEL') or 'INFO').upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name}")
    return level


def setup_logging(log_level=None, log_file=None, max_bytes=10*1024*1024, backup_count=5):
    """
    Send the client's log records to stdout or a rotating file.

    Only the 'sendly' logger tree is configured, so handlers the application
    put on the root logger are left alone. Records from that tree no longer
    propagate to the root. Calling it again replaces the previous handler.

    Args:
        log_level: Level name or number (LOG_LEVEL env var, then INFO, if None)
        log_file: Path to log file (LOG_FILE env var, then stdout, if None)
        max_bytes: Maximum size of log file before rotation (default 10MB)
        backup_count: Number of rotated files to keep (default 5)

    Returns:
        The configured 'sendly' logger

    Raises:
        ValueError: if log_level is not a known level name
    """
    level = _resolve_level(log_level)

    if log_file is None:
        log_file = os.environ.get('LOG_FILE')

    if log_file:
        handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8',
        )
    else:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    logger = logging.getLogger(SENDLY_LOGGER)
    for previous in logger.handlers[:]:
        logger.removeHandler(previous)
        previous.close()

    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    logger.debug(f"Logging to {log_file or 'stdout'} at {logging.getLevelName(level)}")
    return logger


def _format_event(log_data):
    # key=value pairs for easy parsing
    return ' '.join([f"{k}={v}" for k, v in log_data.items()])


def log_security_event(event_type, details, client_ip=None):
    """
    Log security-related events with structured information.

    Args:
        event_type: Type of security event (e.g., 'webhook_signature_invalid')
        details: Additional details about the event
        client_ip: Client IP address
    """
    logger = logging.getLogger('sendly.security')

    log_data = {
        'event_type': event_type,
        'details': details,
        'timestamp': datetime.now(timezone.utc).isoformat(),
    }

    if client_ip:
        log_data['client_ip'] = client_ip

    logger.warning(f"SECURITY: {_format_event(log_data)}")


def log_api_event(event_type, method, path, status_code=None, attempt=None,
                  error=None, success=True):
    """
    Log API request events with structured information.

    Args:
        event_type: Type of API event (e.g., 'request_retry', 'request_failed')
        method: HTTP method
        path: API path, relative to the base URL
        status_code: HTTP status code, if a response was received
        attempt: Zero-based attempt number
        error: Error message if applicable
        success: Whether the operation was successful
    """
    logger = logging.getLogger('sendly.api')

    log_data = {
        'event_type': event_type,
        'method': method,
        'path': path,
        'success': success,
    }

    if status_code is not None:
        log_data['status_code'] = status_code
    if attempt is not None:
        log_data['attempt'] = attempt
    if error:
        log_data['error'] = error

    if success:
        logger.info(f"API: {_format_event(log_data)}")
    else:
        logger.warning(f"API: {_format_event(log_data)}")

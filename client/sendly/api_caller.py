"""
Sendly API Client Module

This module provides the configuration and the request engine shared by every
Sendly resource: authenticated requests, bounded retries with exponential
backoff, and mapping of HTTP/transport failures onto typed errors.
"""

import json
import logging
import os
import time
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Dict, Mapping, Optional

import requests

from . import __version__
from .exceptions import (
    AuthenticationError,
    InsufficientCreditsError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    SendlyError,
    ValidationError,
    is_retryable,
)
from .logging_config import log_api_event

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://sendly.live/api/v1"
DEFAULT_TIMEOUT = 30
DEFAULT_CONNECT_TIMEOUT = 10
DEFAULT_MAX_RETRIES = 3
USER_AGENT = f"sendly-python/{__version__}"


def get_default_config_path() -> str:
    """Get the default configuration file path following XDG standards"""
    config_path = os.environ.get("SENDLY_CONFIG")
    if config_path:
        return config_path

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        return os.path.join(xdg_config_home, "sendly", "config.json")

    home = os.environ.get("HOME")
    if home:
        return os.path.join(home, ".config", "sendly", "config.json")

    return os.path.join(os.getcwd(), ".config", "sendly", "config.json")


@dataclass(frozen=True)
class SendlyConfig:
    """Configuration for the Sendly client. Immutable once constructed."""

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES

    def __post_init__(self):
        if not self.api_key:
            raise AuthenticationError("API key is required")
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.timeout <= 0 or self.connect_timeout <= 0:
            raise ValueError("timeouts must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SendlyConfig":
        """Build a configuration from SENDLY_* environment variables"""
        env = os.environ if environ is None else environ
        return cls(
            api_key=env.get("SENDLY_API_KEY", ""),
            base_url=env.get("SENDLY_BASE_URL", DEFAULT_BASE_URL),
            timeout=float(env.get("SENDLY_TIMEOUT", DEFAULT_TIMEOUT)),
            connect_timeout=float(env.get("SENDLY_CONNECT_TIMEOUT", DEFAULT_CONNECT_TIMEOUT)),
            max_retries=int(env.get("SENDLY_MAX_RETRIES", DEFAULT_MAX_RETRIES)),
        )

    @classmethod
    def from_file(cls, config_path: Optional[str] = None) -> "SendlyConfig":
        """Load configuration from a JSON file"""
        if config_path is None:
            config_path = get_default_config_path()

        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, 'r') as f:
            config_data = json.load(f)

        if 'api_key' not in config_data:
            raise ValueError("Missing required config field: api_key")

        return cls(
            api_key=config_data['api_key'],
            base_url=config_data.get('base_url', DEFAULT_BASE_URL),
            timeout=config_data.get('timeout', DEFAULT_TIMEOUT),
            connect_timeout=config_data.get('connect_timeout', DEFAULT_CONNECT_TIMEOUT),
            max_retries=config_data.get('max_retries', DEFAULT_MAX_RETRIES),
        )


def _decode_json(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def classify_response(response: requests.Response) -> SendlyError:
    """Convert an HTTP error response into a typed error"""
    status_code = response.status_code
    body = _decode_json(response)
    if not isinstance(body, dict):
        body = {}
    message = body.get('message') or body.get('error') or 'Unknown error'

    if status_code == 401:
        return AuthenticationError(message)
    if status_code == 402:
        return InsufficientCreditsError(message)
    if status_code == 404:
        return NotFoundError(message)
    if status_code == 429:
        try:
            retry_after = int(response.headers.get('Retry-After', 0))
        except (TypeError, ValueError):
            retry_after = 0
        return RateLimitError(message, retry_after)
    if status_code in (400, 422):
        return ValidationError(message, body.get('details'), status_code=status_code, local=False)
    return SendlyError(message, status_code)


class Sendly:
    """Client for the Sendly API

    Usage:
        with Sendly("sk_live_...") as client:
            message = client.messages.send("+15551234567", "Hello!")
    """

    def __init__(self, api_key: Optional[str] = None, *, base_url: Optional[str] = None,
                 timeout: Optional[float] = None, connect_timeout: Optional[float] = None,
                 max_retries: Optional[int] = None, config: Optional[SendlyConfig] = None,
                 session: Optional[requests.Session] = None):
        """
        Args:
            api_key: Sendly API key, required unless config is given
            base_url, timeout, connect_timeout, max_retries: Override the
                SendlyConfig defaults
            config: Prebuilt configuration, used instead of api_key and the
                individual settings (passing both is a ValueError)
            session: requests.Session to send through. Its headers are updated
                with the client's auth headers, and the caller stays
                responsible for closing it.
        """
        settings = {
            'base_url': base_url,
            'timeout': timeout,
            'connect_timeout': connect_timeout,
            'max_retries': max_retries,
        }

        if config is not None:
            conflicting = [name for name, value in [('api_key', api_key), *settings.items()]
                           if value is not None]
            if conflicting:
                raise ValueError(f"config cannot be combined with: {', '.join(conflicting)}")
        else:
            config = SendlyConfig(
                api_key=api_key or "",
                **{name: value for name, value in settings.items() if value is not None},
            )

        self.config = config
        self._owns_session = session is None
        self.session = requests.Session() if session is None else session
        self.session.headers.update({
            'Authorization': f'Bearer {config.api_key}',
            'Content-Type': 'application/json',
            'Accept': 'application/json',
            'User-Agent': USER_AGENT,
        })

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Release pooled connections, unless the session was supplied by the caller"""
        if self._owns_session:
            self.session.close()

    @cached_property
    def messages(self):
        from .resources.messages import Messages
        return Messages(self)

    @cached_property
    def account(self):
        from .resources.account import Account
        return Account(self)

    @cached_property
    def verify(self):
        from .resources.verify import Verify
        return Verify(self)

    @cached_property
    def templates(self):
        from .resources.templates import Templates
        return Templates(self)

    @cached_property
    def media(self):
        from .resources.media import Media
        return Media(self)

    @cached_property
    def contacts(self):
        from .resources.contacts import Contacts
        return Contacts(self)

    @cached_property
    def campaigns(self):
        from .resources.campaigns import Campaigns
        return Campaigns(self)

    @cached_property
    def webhooks(self):
        from .resources.webhooks import Webhooks
        return Webhooks(self)

    def _url(self, path: str) -> str:
        return self.config.base_url.rstrip('/') + '/' + path.lstrip('/')

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request('GET', path, params=params)

    def post(self, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        return self.request('POST', path, json=body if body is not None else {})

    def patch(self, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        return self.request('PATCH', path, json=body if body is not None else {})

    def put(self, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        return self.request('PUT', path, json=body if body is not None else {})

    def delete(self, path: str) -> Any:
        return self.request('DELETE', path)

    def post_multipart(self, path: str, files: Dict[str, Any], data: Optional[Dict[str, Any]] = None) -> Any:
        # Content-Type is left to requests so it can add the multipart boundary
        return self.request('POST', path, files=files, data=data,
                             headers={'Content-Type': None})

    def request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None,
                json: Any = None, **kwargs) -> Any:
        """Perform one API operation with bounded retries.

        Makes up to max_retries + 1 attempts, sleeping 2 ** (attempt - 1)
        seconds before each retry. Network failures and unclassified server
        errors are retried; every other error is raised on first occurrence.

        Returns:
            The decoded JSON body, or an empty dict if the body is empty or
            not a JSON object/array.
        """
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        url = self._url(path)
        timeout = (self.config.connect_timeout, self.config.timeout)
        last_error: Optional[SendlyError] = None

        for attempt in range(self.config.max_retries + 1):
            if attempt > 0:
                delay = 2 ** (attempt - 1)
                logger.debug(f"Retrying {method} {path} in {delay}s (attempt {attempt})")
                time.sleep(delay)

            logger.debug(f"{method} {url} attempt={attempt}")

            try:
                response = self.session.request(
                    method, url, params=params or None, json=json, timeout=timeout, **kwargs
                )
            except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
                last_error = NetworkError(f"Connection failed: {e}")
                last_error.__cause__ = e
                log_api_event('request_retry', method, path, attempt=attempt,
                              error=last_error.message, success=False)
                continue
            except requests.exceptions.RequestException as e:
                last_error = NetworkError(f"Request failed: {e}")
                last_error.__cause__ = e
                log_api_event('request_retry', method, path, attempt=attempt,
                              error=last_error.message, success=False)
                continue

            if 200 <= response.status_code < 300:
                body = _decode_json(response)
                if isinstance(body, (dict, list)):
                    return body
                return {}

            last_error = classify_response(response)
            if not is_retryable(last_error):
                log_api_event('request_failed', method, path, status_code=response.status_code,
                              attempt=attempt, error=last_error.message, success=False)
                raise last_error

            log_api_event('request_retry', method, path, status_code=response.status_code,
                          attempt=attempt, error=last_error.message, success=False)

        if last_error is None:
            last_error = SendlyError("Request failed after retries")
        logger.error(f"{method} {path} failed after {self.config.max_retries + 1} attempts: {last_error.message}")
        raise last_error


def send_sms(config: SendlyConfig, to: str, text: str, **options):
    """
    Send a single SMS message with a short-lived client

    Args:
        config: Sendly configuration
        to: Recipient phone number in E.164 format
        text: Message content
        **options: Passed through to Messages.send

    Returns:
        Message: The sent message
    """
    with Sendly(config=config) as client:
        return client.messages.send(to, text, **options)

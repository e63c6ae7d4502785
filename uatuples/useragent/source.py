"""User-Agent string source with override support.

By default the User-Agent is read from the ambient environment: the
``User-Agent`` header of the active Flask request, or the ``HTTP_USER_AGENT``
environment variable (CGI/WSGI convention) outside a request. Applications
and tests may override it with a fixed string.

The value is cached when first accessed and stays cached until the source is
reconfigured with ``set_user_agent``.
"""

import os
import logging
import threading
from typing import Callable, List, Optional

from flask import has_request_context, request

from .extractor import VersionTuple, extract_version_tuples

logger = logging.getLogger('uatuples.useragent')

UserAgentReader = Callable[[], str]

MODE_ENVIRONMENT = 'environment'
MODE_OVERRIDE = 'override'

_UNSET = object()


def read_environment_user_agent() -> str:
    """Give the User-Agent string as supplied by the host environment.

    Returns '' when no User-Agent is available.
    """
    if has_request_context():
        return request.headers.get('User-Agent', '') or ''
    return os.environ.get('HTTP_USER_AGENT', '') or ''


class UserAgentSource:
    """Cached, overridable accessor for the current User-Agent string.

    Usage:
        source = UserAgentSource()              # read from environment
        source = UserAgentSource('Foo/1.0')     # fixed override
        source.set_user_agent(None)             # back to environment
    """

    def __init__(
        self,
        override: Optional[str] = None,
        environ_reader: Optional[UserAgentReader] = None,
    ):
        self._environ_reader = environ_reader or read_environment_user_agent
        self._lock = threading.Lock()
        self._override: Optional[str] = None
        self._cached = _UNSET
        self._configure(override)

    def _configure(self, override: Optional[str]) -> None:
        with self._lock:
            self._override = override
            self._cached = _UNSET

    @property
    def mode(self) -> str:
        return MODE_ENVIRONMENT if self._override is None else MODE_OVERRIDE

    def set_user_agent(self, user_agent: Optional[str]) -> None:
        """Override the User-Agent. Set to None to use the environment instead."""
        self._configure(user_agent)
        logger.debug('user agent source reconfigured mode=%s', self.mode)

    def get_user_agent(self) -> str:
        """Return the User-Agent string, evaluating the source on first access."""
        with self._lock:
            if self._cached is _UNSET:
                if self._override is not None:
                    self._cached = self._override
                else:
                    self._cached = self._environ_reader() or ''
            return self._cached  # type: ignore[return-value]

    def match_user_agent(self, needle: str) -> bool:
        """Whether the User-Agent contains the given string (case-sensitive)."""
        return needle in self.get_user_agent()

    def extract_version_tuples(self) -> List[VersionTuple]:
        return extract_version_tuples(self.get_user_agent())


# Process-wide default source
_DEFAULT_SOURCE = UserAgentSource()


def get_default_source() -> UserAgentSource:
    return _DEFAULT_SOURCE


def get_user_agent() -> str:
    """Return the process-wide User-Agent string."""
    return _DEFAULT_SOURCE.get_user_agent()


def set_user_agent(user_agent: Optional[str]) -> None:
    """Applications may override environment detection by setting this string.

    Set to None to read from the environment again.
    """
    _DEFAULT_SOURCE.set_user_agent(user_agent)


def match_user_agent(needle: str) -> bool:
    return _DEFAULT_SOURCE.match_user_agent(needle)

"""User-Agent utilities.

Architecture:
- extractor.py: splits a User-Agent into (product, version, comment) tuples
- source.py: cached, overridable accessor for the current User-Agent string
"""

from .extractor import (
    VersionTuple,
    extract_version_tuples,
    find_version_tuple,
    version_tuples_to_map,
)
from .source import (
    UserAgentSource,
    get_default_source,
    get_user_agent,
    set_user_agent,
    match_user_agent,
)

__all__ = [
    'VersionTuple',
    'extract_version_tuples',
    'find_version_tuple',
    'version_tuples_to_map',
    'UserAgentSource',
    'get_default_source',
    'get_user_agent',
    'set_user_agent',
    'match_user_agent',
]

"""Version tuple extraction for User-Agent strings.

Splits a User-Agent into its product sections. Example UA:

    Mozilla/5.0 (iPad; U; CPU OS 3_2_1 like Mac OS X; en-us)
    AppleWebKit/531.21.10 (KHTML, like Gecko) Mobile/7B405

This has three version tuples: Mozilla, AppleWebKit and Mobile. The first two
carry the contents of the parenthetical that follows them as a comment.

No classification happens here; callers interpret the tuples.
"""

import re
import logging
from typing import Dict, Iterator, List, Optional, Any
from dataclasses import dataclass

logger = logging.getLogger('uatuples.useragent')


# Matches each section of a user agent string.
VERSION_TUPLE_RE = re.compile(
    # Product. May contain spaces ('Mobile Safari' in 'Mobile Safari/5.0')
    r'([A-Za-z0-9_][A-Za-z0-9_ ]*)'
    r'/'                   # slash
    r'(\S+)'               # version (i.e. '5.0b')
    r'\s*'                 # whitespace
    r"(?:\(([^\n\r\u2028\u2029]*?)\))?"  # parenthetical info on one line, parentheses not captured
)


@dataclass(frozen=True)
class VersionTuple:
    """One product section of a User-Agent string."""
    product: str
    version: str
    comment: Optional[str] = None  # None when no (or an empty) parenthetical follows

    def __iter__(self) -> Iterator[Optional[str]]:
        return iter((self.product, self.version, self.comment))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'product': self.product,
            'version': self.version,
            'comment': self.comment,
        }


def extract_version_tuples(user_agent: str) -> List[VersionTuple]:
    """Parse the user agent into tuples for each section.

    Sections are returned in the order they appear. Text that does not form
    a ``product/version`` section is skipped, so any string yields a (possibly
    empty) list. Scan time grows quadratically with input that has no slash,
    so cap the length of untrusted input before calling.

    Args:
        user_agent: Raw User-Agent string

    Returns:
        List of VersionTuple (product, version, comment)
    """
    data: List[VersionTuple] = []
    if not user_agent:
        return data

    for match in VERSION_TUPLE_RE.finditer(user_agent):
        data.append(VersionTuple(
            product=match.group(1),
            version=match.group(2),
            # '()' captures an empty string; report it as no comment at all
            comment=match.group(3) or None,
        ))

    logger.debug('extracted %d version tuples from ua_len=%d', len(data), len(user_agent))
    return data


def find_version_tuple(tuples: List[VersionTuple], product: str) -> Optional[VersionTuple]:
    """Return the first tuple whose product equals ``product`` exactly."""
    for item in tuples:
        if item.product == product:
            return item
    return None


def version_tuples_to_map(tuples: List[VersionTuple]) -> Dict[str, str]:
    """Map product -> version. First occurrence wins for repeated products."""
    out: Dict[str, str] = {}
    for item in tuples:
        out.setdefault(item.product, item.version)
    return out

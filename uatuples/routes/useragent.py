from flask import Blueprint, request, jsonify, current_app
import logging, os

from ..exceptions import ValidationError, UserAgentTooLongError
from ..useragent import UserAgentSource

bp = Blueprint('useragent', __name__)

PARSE_LIMIT = os.environ.get('UATUPLES_PARSE_RATE_LIMIT', '240 per minute')

log = logging.getLogger('uatuples.api')


def _rate_limited(impl):
    limiter = current_app.extensions.get('limiter')
    if limiter:
        # apply limit manually (since blueprint-level decorator sometimes loads before limiter)
        @limiter.limit(PARSE_LIMIT)
        def inner():
            return impl()
        return inner()
    return impl()


def _request_source() -> UserAgentSource:
    """Build a per-request source: explicit input overrides the request's own header."""
    explicit = None
    if request.method == 'GET':
        explicit = request.args.get('ua')
    else:
        data = request.get_json(silent=True)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValidationError('invalid JSON body')
        explicit = data.get('user_agent')
        if explicit is not None and not isinstance(explicit, str):
            raise ValidationError('user_agent must be a string', details={'type': type(explicit).__name__})
    source = UserAgentSource(explicit)
    max_len = current_app.config.get('UATUPLES_MAX_UA_LENGTH')
    ua = source.get_user_agent()
    if max_len and len(ua) > max_len:
        raise UserAgentTooLongError(len(ua), max_len)
    return source


@bp.route('/api/ua/tuples', methods=['GET', 'POST'])
def tuples():
    return _rate_limited(tuples_impl)


def tuples_impl():
    source = _request_source()
    items = source.extract_version_tuples()
    log.info('/api/ua/tuples mode=%s ua_len=%d tuples=%d', source.mode, len(source.get_user_agent()), len(items))
    return jsonify({
        'user_agent': source.get_user_agent(),
        'count': len(items),
        'tuples': [t.to_dict() for t in items],
    })


@bp.route('/api/ua/match', methods=['GET'])
def match():
    return _rate_limited(match_impl)


def match_impl():
    needle = request.args.get('needle')
    if needle is None:
        raise ValidationError('missing needle parameter')
    source = _request_source()
    matched = source.match_user_agent(needle)
    log.debug('/api/ua/match needle=%r matched=%s', needle, matched)
    return jsonify({
        'needle': needle,
        'matched': matched,
        'user_agent': source.get_user_agent(),
    })

import os
import logging
from flask import Flask, jsonify
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from .exceptions import UATuplesException, ConfigurationError, error_response

DEFAULT_MAX_UA_LENGTH = 2048


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(name, f'expected an integer, got {raw!r}')


def create_app():
    app = Flask(__name__)

    # Logging configuration
    level_name = os.environ.get('UATUPLES_LOG_LEVEL', 'INFO').upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    )
    # Optional rotating file handler for persistent logs
    log_file = os.environ.get('UATUPLES_LOG_FILE')
    if log_file:
        from logging.handlers import RotatingFileHandler
        max_bytes = _env_int('UATUPLES_LOG_MAX_BYTES', 5 * 1024 * 1024)
        backup = _env_int('UATUPLES_LOG_BACKUP_COUNT', 5)
        try:
            fh = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup)
        except OSError as e:
            logging.getLogger(__name__).warning('failed attaching RotatingFileHandler for %s err=%s', log_file, e)
        else:
            fh.setLevel(level)
            fh.setFormatter(logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s'))
            logging.getLogger().addHandler(fh)
            logging.getLogger(__name__).info(
                'RotatingFileHandler attached path=%s max_bytes=%d backups=%d',
                log_file, max_bytes, backup)
    logging.getLogger('werkzeug').setLevel(logging.WARNING)
    logging.getLogger(__name__).info('Logging initialized at level %s', level_name)

    app.config['UATUPLES_MAX_UA_LENGTH'] = _env_int('UATUPLES_MAX_UA_LENGTH', DEFAULT_MAX_UA_LENGTH)
    app.config['UATUPLES_VERSION'] = os.environ.get('UATUPLES_VERSION', '0.1.0')

    # Rate limiting configuration
    default_rate = os.environ.get('UATUPLES_RATE_LIMIT', '60 per minute')
    # Use Redis storage for limiter when provided, otherwise in-memory storage
    redis_url = os.environ.get('UATUPLES_REDIS_URL')
    storage_uri = redis_url if redis_url else 'memory://'
    limiter = Limiter(key_func=get_remote_address, app=app, default_limits=[default_rate], storage_uri=storage_uri)

    # Expose limiter for blueprints to use specific limits
    app.extensions['limiter'] = limiter

    @app.errorhandler(UATuplesException)
    def _handle_uatuples_error(exc: UATuplesException):
        logging.getLogger('uatuples.api').info('request rejected code=%s msg=%s', exc.error_code, exc.message)
        body, status = error_response(exc)
        return jsonify(body), status

    # register blueprints
    from .routes.useragent import bp as ua_bp
    from .routes.system import system_bp
    app.register_blueprint(ua_bp)
    app.register_blueprint(system_bp)

    rule_paths = sorted({r.rule for r in app.url_map.iter_rules()})
    logging.getLogger(__name__).info('Route map initialized count=%d sample=%s', len(rule_paths), rule_paths[:15])
    return app

import time, pathlib
from flask import Blueprint, jsonify, current_app

system_bp = Blueprint('system', __name__)

_START_TIME = time.time()

def _get_commit_short() -> str:
    # Try to read git commit if repository available
    root = pathlib.Path(__file__).resolve().parent.parent.parent
    head_file = root / '.git' / 'HEAD'
    try:
        if not head_file.exists():
            return 'unknown'
        head_content = head_file.read_text().strip()
        if head_content.startswith('ref:'):
            ref_path = root / '.git' / head_content.split(' ',1)[1]
            if ref_path.exists():
                return ref_path.read_text().strip()[:7] or 'unknown'
            return 'unknown'
        return head_content[:7]
    except OSError:
        return 'unknown'

_COMMIT = _get_commit_short()

@system_bp.route('/health', methods=['GET'])
def health():
    uptime = time.time() - _START_TIME
    return jsonify({'status': 'ok', 'uptime_seconds': round(uptime,2)})

@system_bp.route('/version', methods=['GET'])
def version():
    uptime = time.time() - _START_TIME
    return jsonify({
        'version': current_app.config.get('UATUPLES_VERSION'),
        'git_commit': _COMMIT,
        'uptime_seconds': round(uptime,2),
        'max_ua_length': current_app.config.get('UATUPLES_MAX_UA_LENGTH'),
    })

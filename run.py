import os
from uatuples import create_app

app = create_app()

if __name__ == '__main__':
    # Debug/reloader off by default. Enable by setting UATUPLES_DEBUG_SERVER=1
    debug_flag = os.environ.get('UATUPLES_DEBUG_SERVER', '0') == '1'
    routes = sorted({r.rule for r in app.url_map.iter_rules()})
    print(f"[uatuples] Route count={len(routes)} sample={routes[:20]}")
    app.run(host='0.0.0.0', port=5000, debug=debug_flag, use_reloader=debug_flag)

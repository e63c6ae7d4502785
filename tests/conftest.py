import sys
import pathlib

import pytest

# Ensure project root is on sys.path so 'import uatuples' works when pytest runs from
# different working directories or when running individual tests.
_ROOT = pathlib.Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from uatuples import create_app
from uatuples.useragent import set_user_agent


@pytest.fixture
def app():
    app = create_app()
    app.testing = True
    app.extensions.get('limiter').enabled = False  # type: ignore
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture(autouse=True)
def _reset_default_user_agent():
    set_user_agent(None)
    yield
    set_user_agent(None)

#setup: python -m venv .venv
#setup: source .venv/bin/activate   # (windows: .venv\Scripts\activate)
#setup: pip install -U pip -e ".[test]"
#setup: flask --app investcalc.wsgi run --port 5000 --debug

from __future__ import annotations

from investcalc.app import create_app
from investcalc.config import get_settings

app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    app.run(host=settings.host, port=settings.port, debug=settings.debug)

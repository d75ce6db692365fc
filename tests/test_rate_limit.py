import sys
import unittest
from dataclasses import replace
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fastapi import FastAPI, Request  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from slowapi import _rate_limit_exceeded_handler  # noqa: E402
from slowapi.errors import RateLimitExceeded  # noqa: E402

from hr_assistant.api.v1 import sessions  # noqa: E402
from hr_assistant.core import rate_limit as rate_limit_module  # noqa: E402
from hr_assistant.core.config import settings  # noqa: E402
from hr_assistant.core.rate_limit import limiter  # noqa: E402


class RateLimitTests(unittest.TestCase):
    def setUp(self):
        self._enabled = limiter.enabled
        limiter.enabled = True
        limiter.reset()

    def tearDown(self):
        limiter.reset()
        limiter.enabled = self._enabled

    def _client(self, configured):
        app = FastAPI()
        app.state.limiter = limiter
        app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

        with patch.object(rate_limit_module, "settings", configured):

            @app.post("/limited")
            @rate_limit_module.rate_limit()
            async def limited(request: Request):
                return {"ok": True}

            @app.post("/limited-analysis")
            @rate_limit_module.analysis_rate_limit()
            async def limited_analysis(request: Request):
                return {"ok": True}

        return TestClient(app)

    def test_default_limit_comes_from_settings(self):
        configured = replace(settings, rate_limit_enabled=True, rate_limit="2/minute", analysis_rate_limit="5/minute")
        client = self._client(configured)
        codes = [client.post("/limited").status_code for _ in range(3)]
        self.assertEqual(codes, [200, 200, 429])

    def test_analysis_routes_use_their_own_limit(self):
        configured = replace(settings, rate_limit_enabled=True, rate_limit="5/minute", analysis_rate_limit="1/minute")
        client = self._client(configured)
        codes = [client.post("/limited-analysis").status_code for _ in range(2)]
        self.assertEqual(codes, [200, 429])

    def test_disabled_limits_leave_routes_undecorated(self):
        configured = replace(settings, rate_limit_enabled=False)
        with patch.object(rate_limit_module, "settings", configured):
            decorate = rate_limit_module.rate_limit()

        async def handler(request: Request):
            return None

        self.assertIs(decorate(handler), handler)

    def test_session_mutation_routes_are_limited(self):
        route_names = {route.name for route in sessions.router.routes}
        for name in ("create_session", "paste_text", "upload_document", "clear_slot", "select_tab"):
            with self.subTest(route=name):
                self.assertIn(name, route_names)
                self.assertTrue(hasattr(getattr(sessions, name), "__wrapped__") or not settings.rate_limit_enabled)


if __name__ == "__main__":
    unittest.main()

import os
import sys
import unittest
from dataclasses import replace
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("RATE_LIMIT_ENABLED", "0")

from fastapi.testclient import TestClient  # noqa: E402

from hr_assistant.core.config import settings  # noqa: E402
from hr_assistant.core.session_store import clear_sessions  # noqa: E402
from hr_assistant.core.rate_limit import limiter  # noqa: E402
from hr_assistant.main import app  # noqa: E402
from hr_assistant.services.analysis_gateway import AnalysisGateway  # noqa: E402
from hr_assistant.services.analysis_orchestrator import AnalysisOrchestrator, get_orchestrator  # noqa: E402
from samples import JD_TEXT, RESUME_TEXT, FakeTransport, error_response  # noqa: E402


class SessionsApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        limiter.enabled = False
        cls.client = TestClient(app)

    @classmethod
    def tearDownClass(cls):
        limiter.enabled = settings.rate_limit_enabled

    def setUp(self):
        clear_sessions()
        self.transport = FakeTransport()
        app.dependency_overrides[get_orchestrator] = lambda: AnalysisOrchestrator(AnalysisGateway(self.transport))
        response = self.client.post("/v1/sessions")
        self.assertEqual(response.status_code, 201)
        self.session_id = response.json()["session_id"]
        self.base = f"/v1/sessions/{self.session_id}"

    def tearDown(self):
        app.dependency_overrides.clear()

    def _paste_both(self):
        self.client.put(f"{self.base}/slots/resume/text", json={"text": RESUME_TEXT})
        return self.client.put(f"{self.base}/slots/job_description/text", json={"text": JD_TEXT})

    def test_new_session_is_ready_for_analysis(self):
        body = self.client.get(self.base).json()
        self.assertFalse(body["analyzing"])
        self.assertFalse(body["can_analyze"])
        self.assertEqual(body["active_tab"], "match")
        self.assertEqual(body["view"]["view"], "empty")
        self.assertEqual(body["view"]["title"], "Ready for Analysis")

    def test_txt_upload_is_verbatim(self):
        response = self.client.post(
            f"{self.base}/slots/resume/upload",
            files={"file": ("resume.txt", RESUME_TEXT.encode("utf-8"), "text/plain")},
        )
        self.assertEqual(response.status_code, 200)
        slot = response.json()["resume"]
        self.assertEqual(slot["text"], RESUME_TEXT)
        self.assertEqual(slot["file_name"], "resume.txt")
        self.assertEqual(slot["source_kind"], "uploaded")
        self.assertFalse(slot["parsing"])

    def test_unsupported_upload_reports_slot_error(self):
        response = self.client.post(
            f"{self.base}/slots/job_description/upload",
            files={"file": ("jd.png", b"\x89PNG\r\n", "image/png")},
        )
        self.assertEqual(response.status_code, 200)
        slot = response.json()["job_description"]
        self.assertEqual(slot["text"], "")
        self.assertIn("Unsupported file type", slot["error"])

    def test_oversized_upload_is_rejected(self):
        with patch("hr_assistant.api.v1.sessions.settings", replace(settings, max_upload_bytes=10)):
            response = self.client.post(
                f"{self.base}/slots/resume/upload",
                files={"file": ("resume.txt", b"x" * 64, "text/plain")},
            )
        self.assertEqual(response.status_code, 413)
        self.assertEqual(self.client.get(self.base).json()["resume"]["text"], "")

    def test_paste_replaces_uploaded_file_name(self):
        self.client.post(
            f"{self.base}/slots/resume/upload",
            files={"file": ("resume.txt", b"from file", "text/plain")},
        )
        body = self.client.put(f"{self.base}/slots/resume/text", json={"text": "typed"}).json()
        self.assertEqual(body["resume"]["text"], "typed")
        self.assertEqual(body["resume"]["file_name"], "")
        self.assertEqual(body["resume"]["source_kind"], "pasted")

    def test_clear_slot(self):
        self._paste_both()
        body = self.client.delete(f"{self.base}/slots/resume").json()
        self.assertEqual(body["resume"]["text"], "")
        self.assertEqual(body["job_description"]["text"], JD_TEXT)
        self.assertFalse(body["can_analyze"])

    def test_unknown_slot(self):
        response = self.client.put(f"{self.base}/slots/cover/text", json={"text": "x"})
        self.assertEqual(response.status_code, 422)

    def test_analyze_refused_without_both_texts(self):
        self.client.put(f"{self.base}/slots/resume/text", json={"text": RESUME_TEXT})
        self.client.put(f"{self.base}/slots/job_description/text", json={"text": "   "})
        response = self.client.post(f"{self.base}/analyze")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.transport.payloads, [])

    def test_analyze_success_and_tab_switching(self):
        self.assertTrue(self._paste_both().json()["can_analyze"])
        body = self.client.post(f"{self.base}/analyze").json()

        self.assertFalse(body["analyzing"])
        self.assertIsNone(body["error"])
        self.assertEqual(body["view"]["view"], "content")
        self.assertEqual(body["view"]["kind"], "fit")
        self.assertEqual(body["view"]["tab_label"], "Resume vs JD Match")
        self.assertEqual(body["view"]["result"]["fitScore"], 72)

        body = self.client.put(f"{self.base}/tab", json={"tab": "ats"}).json()
        self.assertEqual(body["view"]["kind"], "fit")
        self.assertEqual(body["view"]["result"]["atsScore"], 78)

        body = self.client.put(f"{self.base}/tab", json={"tab": "jd"}).json()
        self.assertEqual(body["view"]["kind"], "jd")
        self.assertEqual(body["view"]["result"]["keySkills"], ["Python", "PostgreSQL", "AWS"])

        body = self.client.put(f"{self.base}/tab", json={"tab": "cover_letter"}).json()
        self.assertEqual(body["view"]["view"], "empty")

    def test_analyze_failure_shows_error_view(self):
        self.transport.responses["jd"] = error_response(500, "quota exceeded")
        self._paste_both()
        body = self.client.post(f"{self.base}/analyze").json()

        self.assertEqual(body["view"]["view"], "error")
        self.assertEqual(body["view"]["title"], "Analysis Failed")
        self.assertEqual(body["view"]["message"], "Failed to get analysis from AI: quota exceeded")
        self.assertEqual(body["error"], body["view"]["message"])

        self.transport.responses.clear()
        body = self.client.post(f"{self.base}/analyze").json()
        self.assertIsNone(body["error"])
        self.assertEqual(body["view"]["view"], "content")

    def test_unknown_session_is_404(self):
        self.assertEqual(self.client.get("/v1/sessions/nope").status_code, 404)
        self.assertEqual(self.client.put("/v1/sessions/nope/tab", json={"tab": "ats"}).status_code, 404)
        self.assertEqual(self.client.post("/v1/sessions/nope/analyze").status_code, 404)

    def test_end_session(self):
        self.assertEqual(self.client.delete(self.base).status_code, 204)
        self.assertEqual(self.client.get(self.base).status_code, 404)


if __name__ == "__main__":
    unittest.main()

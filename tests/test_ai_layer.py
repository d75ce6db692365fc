import os
import sys
import unittest
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from hr_assistant.ai.config import AIConfigurationError, load_ai_config  # noqa: E402
from hr_assistant.ai.factory import get_ai_client  # noqa: E402
from hr_assistant.ai.prompts import render_prompt  # noqa: E402
from hr_assistant.ai.providers.gemini_provider import GeminiProvider  # noqa: E402
from hr_assistant.ai.providers.openai_provider import OpenAIProvider  # noqa: E402
from hr_assistant.schemas.analysis import AnalysisKind  # noqa: E402
from samples import JD_TEXT, RESUME_TEXT  # noqa: E402

_CLEAN_ENV = {
    "AI_PROVIDER": "",
    "AI_MODEL": "",
    "AI_TEMPERATURE": "0.2",
    "GEMINI_API_KEY": "",
    "GOOGLE_API_KEY": "",
    "OPENAI_API_KEY": "",
}


class AIConfigTests(unittest.TestCase):
    def test_defaults_to_gemini(self):
        with patch.dict(os.environ, dict(_CLEAN_ENV, AI_PROVIDER="gemini", GOOGLE_API_KEY="g-key")):
            cfg = load_ai_config()
        self.assertEqual(cfg.provider, "gemini")
        self.assertEqual(cfg.model, "gemini-2.5-flash")
        self.assertEqual(cfg.api_key, "g-key")
        self.assertEqual(cfg.temperature, 0.2)

    def test_placeholder_key_is_treated_as_missing(self):
        with patch.dict(os.environ, dict(_CLEAN_ENV, AI_PROVIDER="openai", OPENAI_API_KEY="your_openai_key")):
            cfg = load_ai_config()
        self.assertEqual(cfg.api_key, "")
        self.assertEqual(cfg.missing_key_message, "The OpenAI API key is not set up. Please contact the administrator.")

    def test_malformed_numbers_fall_back_to_defaults(self):
        env = dict(
            _CLEAN_ENV,
            AI_PROVIDER="gemini",
            GEMINI_API_KEY="g-key",
            AI_TEMPERATURE="warm",
            AI_TIMEOUT_S="soon",
            AI_MAX_RETRIES="x",
        )
        with patch.dict(os.environ, env):
            cfg = load_ai_config()
        self.assertEqual(cfg.temperature, 0.2)
        self.assertEqual(cfg.timeout_s, 60.0)
        self.assertEqual(cfg.max_retries, 0)

    def test_unsupported_provider(self):
        with patch.dict(os.environ, dict(_CLEAN_ENV, AI_PROVIDER="claude")):
            with self.assertRaises(AIConfigurationError):
                load_ai_config()


class AIFactoryTests(unittest.TestCase):
    def test_builds_configured_provider(self):
        with patch.dict(os.environ, dict(_CLEAN_ENV, AI_PROVIDER="gemini", GEMINI_API_KEY="g-key")):
            self.assertIsInstance(get_ai_client(), GeminiProvider)
        with patch.dict(os.environ, dict(_CLEAN_ENV, AI_PROVIDER="openai", OPENAI_API_KEY="sk-test")):
            self.assertIsInstance(get_ai_client(), OpenAIProvider)

    def test_missing_key(self):
        with patch.dict(os.environ, dict(_CLEAN_ENV, AI_PROVIDER="gemini")):
            with self.assertRaises(AIConfigurationError):
                get_ai_client()


class PromptTests(unittest.TestCase):
    def test_resume_prompt_only_has_resume(self):
        prompt = render_prompt(AnalysisKind.RESUME_CRITIQUE, RESUME_TEXT, JD_TEXT)
        self.assertIn(RESUME_TEXT, prompt)
        self.assertNotIn(JD_TEXT, prompt)

    def test_match_prompt_names_the_four_components(self):
        prompt = render_prompt(AnalysisKind.FIT_SCORE, RESUME_TEXT, JD_TEXT)
        for component in ("Keyword Match", "Resume Formatting", "Language & Tone", "Job Role Relevance"):
            self.assertIn(component, prompt)
        self.assertIn(RESUME_TEXT, prompt)
        self.assertIn(JD_TEXT, prompt)

    def test_braces_in_inputs_stay_literal(self):
        prompt = render_prompt(AnalysisKind.FIT_SCORE, "I wrote {JD} parsers", JD_TEXT)
        self.assertIn("I wrote {JD} parsers", prompt)
        self.assertEqual(prompt.count(JD_TEXT), 1)


if __name__ == "__main__":
    unittest.main()

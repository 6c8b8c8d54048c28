"""Tests for the OpenAI client factory."""
import sys
import types
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from app.llm_client import LLMConfigError, get_client, get_model, response_text, response_usage


class TestGetModel:
    def test_advisor_is_default_purpose(self):
        with patch("app.llm_client.settings") as mock_settings:
            mock_settings.advisor_model = "gpt-4o-mini"
            mock_settings.analysis_model = "gpt-4"

            assert get_model() == "gpt-4o-mini"
            assert get_model("analysis") == "gpt-4"


class TestGetClient:
    def test_get_client_passes_key_and_base_url(self):
        with patch("app.llm_client.settings") as mock_settings:
            mock_settings.openai_api_key = "sk-test"
            mock_settings.openai_base_url = ""

            openai_module = types.ModuleType("openai")
            mock_openai = MagicMock()
            openai_module.AsyncOpenAI = mock_openai

            with patch.dict(sys.modules, {"openai": openai_module}):
                get_client()

            mock_openai.assert_called_once_with(
                api_key="sk-test",
                base_url="https://api.openai.com/v1",
            )

    def test_get_client_requires_key(self):
        with patch("app.llm_client.settings") as mock_settings:
            mock_settings.openai_api_key = ""

            with pytest.raises(LLMConfigError, match="OPENAI_API_KEY"):
                get_client()


def test_response_helpers_tolerate_missing_fields():
    assert response_text(SimpleNamespace(choices=[])) == ""
    assert response_usage(SimpleNamespace(usage=None)) == (0, 0)

    response = SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content="hi"))],
        usage=SimpleNamespace(prompt_tokens=3, completion_tokens=4),
    )
    assert response_text(response) == "hi"
    assert response_usage(response) == (3, 4)

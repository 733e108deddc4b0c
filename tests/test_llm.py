"""Tests for LLM-backed field completion and the Ollama client."""

import json

import pytest
import requests

from grantscore.llm import (
    GenerationOptions,
    LLMFieldCompleter,
    OllamaClient,
    build_completion_prompt,
    parse_completion,
)
from grantscore.llm.provider import FieldCompleter, TextGenerator
from grantscore.models import FieldCompletionRequest, Section, SectionKind


@pytest.fixture
def summary_request():
    return FieldCompletionRequest(
        field_name="project_summary",
        section=Section(
            id="project_summary",
            title="Project Summary",
            description="Executive summary of your project",
            kind=SectionKind.NARRATIVE,
            max_length=1000,
        ),
        template_id="tmpl-1",
        grant_id="grant-1",
        current_data={"project_title": "Mobile Dental Clinics"},
        context={"organization": "Valley Health Cooperative"},
    )


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        return self.payload


class TestParseCompletion:
    """Tests for parsing generator output."""

    def test_json_output(self):
        text = json.dumps({"value": "Mobile clinics", "confidence": 0.85, "reasoning": "From title"})

        completion = parse_completion(text, default_confidence=0.5, section_title="Project Summary")

        assert completion.value == "Mobile clinics"
        assert completion.confidence == 0.85
        assert completion.reasoning == "From title"

    def test_confidence_clamped(self):
        completion = parse_completion('{"value": 12000, "confidence": 7}', 0.5, "Total Budget")

        assert completion.value == 12000
        assert completion.confidence == 1.0
        assert completion.reasoning == "Generated from Total Budget requirements"

    def test_invalid_confidence_uses_default(self):
        completion = parse_completion('{"value": "x", "confidence": "high"}', 0.5, "Title")

        assert completion.confidence == 0.5

    def test_raw_text(self):
        completion = parse_completion("  Mobile dental care for rural schools.\n", 0.5, "Project Summary")

        assert completion.value == "Mobile dental care for rural schools."
        assert completion.confidence == 0.5

    def test_json_without_value_is_raw_text(self):
        completion = parse_completion('{"answer": "x"}', 0.4, "Title")

        assert completion.value == '{"answer": "x"}'
        assert completion.confidence == 0.4


class TestLLMFieldCompleter:
    """Tests for the prompt-driven completer."""

    def test_prompt_contents(self, summary_request):
        prompt = build_completion_prompt(summary_request)

        assert "Field: project_summary" in prompt
        assert "Section title: Project Summary" in prompt
        assert "Section type: narrative" in prompt
        assert "Maximum length: 1000 characters" in prompt
        assert "Mobile Dental Clinics" in prompt
        assert "Valley Health Cooperative" in prompt

    def test_empty_context(self, summary_request):
        request = summary_request.model_copy(update={"current_data": {}, "context": {}})

        assert "(none)" in build_completion_prompt(request)

    def test_complete(self, summary_request, make_generator, test_config):
        generator = make_generator('{"value": "Mobile clinics bring dental care to schools.", "confidence": 0.9}')
        completer = LLMFieldCompleter(generator, test_config)

        completion = completer.complete(summary_request)

        assert completion.value == "Mobile clinics bring dental care to schools."
        assert completion.confidence == 0.9

        prompt, options = generator.calls[0]
        assert "Project Summary" in prompt
        assert options.model == test_config.llm_model
        assert options.temperature == test_config.llm_temperature
        assert options.max_tokens == test_config.llm_max_tokens

    def test_generator_errors_propagate(self, summary_request, test_config):
        class BrokenGenerator:
            def generate(self, prompt, options):
                raise RuntimeError("connection refused")

        completer = LLMFieldCompleter(BrokenGenerator(), test_config)

        with pytest.raises(RuntimeError, match="connection refused"):
            completer.complete(summary_request)

    def test_protocols(self, make_generator, test_config):
        generator = make_generator("x")

        assert isinstance(generator, TextGenerator)
        assert isinstance(LLMFieldCompleter(generator, test_config), FieldCompleter)
        assert isinstance(OllamaClient(), TextGenerator)


class TestOllamaClient:
    """Tests for the Ollama HTTP client."""

    def test_generate(self, monkeypatch):
        captured = {}

        def fake_post(url, json, timeout):
            captured.update(url=url, json=json, timeout=timeout)
            return FakeResponse({"response": "Generated text"})

        monkeypatch.setattr("grantscore.llm.ollama_client.requests.post", fake_post)
        client = OllamaClient("http://ollama:11434/", timeout=30)

        text = client.generate("Prompt", GenerationOptions(model="llama3", temperature=0.2, max_tokens=64))

        assert text == "Generated text"
        assert captured["url"] == "http://ollama:11434/api/generate"
        assert captured["timeout"] == 30
        assert captured["json"]["model"] == "llama3"
        assert captured["json"]["stream"] is False
        assert captured["json"]["options"] == {"temperature": 0.2, "num_predict": 64}

    def test_generate_failure(self, monkeypatch):
        def fake_post(url, json, timeout):
            return FakeResponse({}, status_code=500)

        monkeypatch.setattr("grantscore.llm.ollama_client.requests.post", fake_post)

        with pytest.raises(RuntimeError, match="Ollama generation failed"):
            OllamaClient().generate("Prompt", GenerationOptions(model="llama3"))

    def test_health_check(self, monkeypatch):
        def unreachable(url, timeout):
            raise requests.ConnectionError("refused")

        monkeypatch.setattr("grantscore.llm.ollama_client.requests.get", unreachable)

        assert OllamaClient().check_health() is False

    def test_from_config(self, test_config):
        client = OllamaClient.from_config(test_config)

        assert client.generate_url == "http://localhost:11434/api/generate"
        assert client.timeout == test_config.llm_timeout

"""Pytest configuration and fixtures."""

import tempfile
from pathlib import Path

import pytest

from grantscore.config import Config, reset_config, set_config
from grantscore.database import Database
from grantscore.models import (
    Draft,
    FieldCompletion,
    FieldCompletionRequest,
    Rule,
    Section,
    SectionKind,
    Template,
)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_config(temp_dir):
    """Create a test configuration and install it as the global config."""
    reset_config()

    config = Config(
        data_dir=temp_dir / ".grantscore",
        ollama_host="http://localhost:11434",
        llm_model="qwen2.5:7b-instruct",
    )
    config.ensure_directories()
    set_config(config)

    yield config

    reset_config()


@pytest.fixture
def test_db(temp_dir):
    """Create a test database."""
    db = Database(temp_dir / "test.db")
    db.connect()
    db.create_schema()
    yield db
    db.close()


@pytest.fixture
def five_field_template():
    """Template with three required and two optional fields."""
    return Template(
        id="tmpl-1",
        grant_id="grant-1",
        title="Rural Healthcare Innovation Fund",
        description="Supports healthcare technology innovation in rural communities",
        sections=[
            Section(id="f1", title="Project Title", kind=SectionKind.TEXT, required=True, order=1),
            Section(id="f2", title="Project Summary", kind=SectionKind.NARRATIVE, required=True, order=2),
            Section(id="f3", title="Total Budget", kind=SectionKind.NUMBER, required=True, order=3),
            Section(id="f4", title="Start Date", kind=SectionKind.DATE, order=4),
            Section(id="f5", title="Letters of Support", kind=SectionKind.FILE, order=5),
        ],
        required_fields=["f1", "f2", "f3"],
        optional_fields=["f4", "f5"],
    )


@pytest.fixture
def summary_template():
    """Template with length rules on the summary field."""
    return Template(
        id="tmpl-2",
        grant_id="grant-2",
        title="Community Education Grant",
        description="Funding for community education programs",
        sections=[
            Section(id="summary", title="Project Summary", kind=SectionKind.NARRATIVE, required=True, order=1),
            Section(id="title", title="Project Title", kind=SectionKind.TEXT, required=True, order=2),
        ],
        required_fields=["summary", "title"],
        validation_rules=[
            Rule(
                field_name="summary",
                kind="minLength",
                parameters={"minLength": 100},
                message="Summary must be at least 100 characters",
            ),
            Rule(
                field_name="title",
                kind="max_length",
                parameters={"max_length": 20},
                message="Title must be at most 20 characters",
            ),
        ],
    )


@pytest.fixture
def empty_draft():
    return Draft(id="draft-empty", template_id="tmpl-1", grant_id="grant-1", user_id="user-1")


class FakeCompleter:
    """Field completer returning canned completions and recording requests."""

    def __init__(self, confidence: float = 0.9):
        self.confidence = confidence
        self.requests: list[FieldCompletionRequest] = []

    def complete(self, request: FieldCompletionRequest) -> FieldCompletion:
        self.requests.append(request)
        return FieldCompletion(
            value=f"Generated {request.section.title}",
            confidence=self.confidence,
            reasoning=f"Based on {request.section.title} requirements",
        )


class FakeGenerator:
    """Text generator returning a fixed response."""

    def __init__(self, response: str):
        self.response = response
        self.calls = []

    def generate(self, prompt, options):
        self.calls.append((prompt, options))
        return self.response


@pytest.fixture
def fake_completer():
    return FakeCompleter()


@pytest.fixture
def make_generator():
    """Factory for fake text generators with a fixed response."""
    return FakeGenerator


@pytest.fixture
def make_completer():
    """Factory for fake field completers with a fixed confidence."""
    return FakeCompleter

"""SQLite storage for application templates and drafts."""

import json
import sqlite3
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter

from grantscore.models import Draft, Suggestion, Template, ValidationResult
from grantscore.utils.logging_config import get_logger

logger = get_logger()

_results_adapter = TypeAdapter(list[ValidationResult])
_suggestions_adapter = TypeAdapter(list[Suggestion])


# Schema SQL
SCHEMA_SQL = """
-- application_templates: Form definitions, one or more per grant
CREATE TABLE IF NOT EXISTS application_templates (
    id TEXT PRIMARY KEY,
    grant_id TEXT NOT NULL,
    title TEXT NOT NULL,
    body TEXT NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_templates_grant ON application_templates(grant_id);

-- application_drafts: In-progress answers against a template
CREATE TABLE IF NOT EXISTS application_drafts (
    id TEXT PRIMARY KEY,
    template_id TEXT NOT NULL,
    grant_id TEXT NOT NULL,
    user_id TEXT NOT NULL,
    title TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'draft',
    form_data TEXT NOT NULL DEFAULT '{}',
    completion_percentage INTEGER NOT NULL DEFAULT 0,
    validation_results TEXT NOT NULL DEFAULT '[]',
    suggestions TEXT NOT NULL DEFAULT '[]',
    last_reviewed_at TIMESTAMP,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_drafts_user ON application_drafts(user_id);
CREATE INDEX IF NOT EXISTS idx_drafts_template ON application_drafts(template_id);
CREATE INDEX IF NOT EXISTS idx_drafts_status ON application_drafts(status);
"""


class Database:
    """SQLite store for templates and drafts."""

    def __init__(self, db_path: Path):
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = db_path
        self.conn: Optional[sqlite3.Connection] = None

    def connect(self) -> None:
        """Open the database connection."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(str(self.db_path))
        self.conn.row_factory = sqlite3.Row
        logger.info(f"Connected to database: {self.db_path}")

    def close(self) -> None:
        """Close database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None
            logger.info("Database connection closed")

    def create_schema(self) -> None:
        """Create database schema."""
        if not self.conn:
            raise RuntimeError("Database not connected")

        self.conn.executescript(SCHEMA_SQL)
        self.conn.commit()
        logger.info("Database schema created")

    # Template operations
    def save_template(self, template: Template) -> str:
        """Insert or replace a template and return its ID."""
        if not self.conn:
            raise RuntimeError("Database not connected")

        template_id = template.id or f"template-{uuid.uuid4().hex}"
        if template_id != template.id:
            template = template.model_copy(update={"id": template_id})

        self.conn.execute(
            """
            INSERT INTO application_templates (id, grant_id, title, body)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                grant_id = excluded.grant_id,
                title = excluded.title,
                body = excluded.body,
                updated_at = CURRENT_TIMESTAMP
            """,
            (template_id, template.grant_id, template.title, template.model_dump_json()),
        )
        self.conn.commit()
        return template_id

    def get_template(self, template_id: str) -> Optional[Template]:
        """Get template by ID."""
        if not self.conn:
            raise RuntimeError("Database not connected")

        cursor = self.conn.execute(
            "SELECT body FROM application_templates WHERE id = ?",
            (template_id,),
        )
        row = cursor.fetchone()

        if row:
            return Template.model_validate_json(row["body"])
        return None

    def get_template_for_grant(self, grant_id: str) -> Optional[Template]:
        """Get the most recently created template for a grant."""
        if not self.conn:
            raise RuntimeError("Database not connected")

        cursor = self.conn.execute(
            """
            SELECT body FROM application_templates
            WHERE grant_id = ?
            ORDER BY created_at DESC, rowid DESC
            LIMIT 1
            """,
            (grant_id,),
        )
        row = cursor.fetchone()

        if row:
            return Template.model_validate_json(row["body"])
        return None

    # Draft operations
    def save_draft(self, draft: Draft) -> str:
        """Insert or update a draft and return its ID."""
        if not self.conn:
            raise RuntimeError("Database not connected")

        draft_id = draft.id or f"draft-{uuid.uuid4().hex}"

        self.conn.execute(
            """
            INSERT INTO application_drafts (
                id, template_id, grant_id, user_id, title, status, form_data,
                completion_percentage, validation_results, suggestions, last_reviewed_at
            )
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                template_id = excluded.template_id,
                grant_id = excluded.grant_id,
                user_id = excluded.user_id,
                title = excluded.title,
                status = excluded.status,
                form_data = excluded.form_data,
                completion_percentage = excluded.completion_percentage,
                validation_results = excluded.validation_results,
                suggestions = excluded.suggestions,
                last_reviewed_at = excluded.last_reviewed_at,
                updated_at = CURRENT_TIMESTAMP
            """,
            (
                draft_id,
                draft.template_id,
                draft.grant_id,
                draft.user_id,
                draft.title,
                draft.status.value,
                json.dumps(draft.form_data, default=str),
                draft.completion_percentage,
                _results_adapter.dump_json(draft.validation_results).decode("utf-8"),
                _suggestions_adapter.dump_json(draft.suggestions).decode("utf-8"),
                draft.last_reviewed_at.isoformat() if draft.last_reviewed_at else None,
            ),
        )
        self.conn.commit()
        return draft_id

    def get_draft(self, draft_id: str) -> Optional[Draft]:
        """Get draft by ID."""
        if not self.conn:
            raise RuntimeError("Database not connected")

        cursor = self.conn.execute("SELECT * FROM application_drafts WHERE id = ?", (draft_id,))
        row = cursor.fetchone()

        if row:
            return self._row_to_draft(row)
        return None

    @staticmethod
    def _row_to_draft(row: sqlite3.Row) -> Draft:
        return Draft(
            id=row["id"],
            template_id=row["template_id"],
            grant_id=row["grant_id"],
            user_id=row["user_id"],
            title=row["title"],
            status=row["status"],
            form_data=json.loads(row["form_data"] or "{}"),
            completion_percentage=row["completion_percentage"],
            validation_results=_results_adapter.validate_json(row["validation_results"] or "[]"),
            suggestions=_suggestions_adapter.validate_json(row["suggestions"] or "[]"),
            last_reviewed_at=datetime.fromisoformat(row["last_reviewed_at"]) if row["last_reviewed_at"] else None,
        )

"""Orchestration layer: load drafts, run the engine, persist the outcome."""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Mapping, Optional, Protocol, Tuple

from grantscore.config import Config, get_config
from grantscore.engine import ApplicationEngine
from grantscore.models import Draft, FieldCompletion, ScoreReport, Template, WritingAssistance
from grantscore.templates import default_template
from grantscore.utils.logging_config import get_logger

logger = get_logger()


class DraftNotFoundError(LookupError):
    """No draft stored under the requested id."""


class TemplateNotFoundError(LookupError):
    """No template could be resolved for a draft."""


class ApplicationStore(Protocol):
    """Key-value access to templates and drafts."""

    def get_template(self, template_id: str) -> Optional[Template]:
        ...

    def get_template_for_grant(self, grant_id: str) -> Optional[Template]:
        ...

    def get_draft(self, draft_id: str) -> Optional[Draft]:
        ...

    def save_template(self, template: Template) -> str:
        ...

    def save_draft(self, draft: Draft) -> str:
        ...


class ApplicationService:
    """Runs engine operations against stored drafts."""

    def __init__(
        self,
        store: ApplicationStore,
        engine: Optional[ApplicationEngine] = None,
        config: Optional[Config] = None,
    ):
        self.store = store
        self.engine = engine or ApplicationEngine()
        self.config = config or get_config()

    def load(self, draft_id: str) -> Tuple[Draft, Template]:
        """Fetch a draft and the template it answers.

        A draft whose template is not stored falls back to the newest
        template stored for its grant, then to the standard template.

        Raises:
            DraftNotFoundError: If the draft does not exist
            TemplateNotFoundError: If no template can be resolved
        """
        draft = self.store.get_draft(draft_id)
        if draft is None:
            raise DraftNotFoundError(f"Application draft not found: {draft_id}")

        template = self.store.get_template(draft.template_id) if draft.template_id else None
        if template is None:
            if not draft.grant_id:
                raise TemplateNotFoundError(f"No template for draft {draft_id}")
            template = self.store.get_template_for_grant(draft.grant_id)
        if template is None:
            logger.info(f"Using default template for grant {draft.grant_id}")
            template = default_template(draft.grant_id)

        return draft, template

    def validate_draft(self, draft_id: str, reference_text: Optional[str] = None) -> ScoreReport:
        """Validate a stored draft and record the results on it."""
        try:
            draft, template = self.load(draft_id)
            report = self.engine.validate(template, draft, reference_text=reference_text)

            reviewed = draft.model_copy(
                update={
                    "validation_results": report.validation_results,
                    "suggestions": report.suggestions,
                    "completion_percentage": report.completion_percentage,
                    "last_reviewed_at": datetime.now(timezone.utc),
                }
            )
            self.store.save_draft(reviewed)

            logger.info(
                f"Application validation completed for {draft_id}: "
                f"score={report.overall_score}, completion={report.completion_percentage}%"
            )
            return report

        except Exception as e:
            logger.error(f"Failed to validate application {draft_id}: {e}", extra={"draft_id": draft_id})
            raise

    def auto_complete_fields(
        self,
        draft_id: str,
        field_names: Iterable[str],
        context: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, FieldCompletion]:
        """Auto-complete fields of a stored draft.

        Every completion is returned; only those above the configured
        auto-apply confidence are written into the draft.
        """
        field_names = list(field_names)
        try:
            draft, template = self.load(draft_id)
            completions = self.engine.auto_complete(template, draft, field_names, context=context)

            threshold = self.config.auto_apply_confidence
            applied = {
                field_name: completion.value
                for field_name, completion in completions.items()
                if completion.confidence > threshold
            }

            if applied:
                updated = draft.model_copy(update={"form_data": {**draft.form_data, **applied}})
                self.store.save_draft(updated)

            logger.info(
                f"Auto-completion completed for {draft_id}: "
                f"requested={len(field_names)}, completed={len(completions)}, applied={len(applied)}"
            )
            return completions

        except Exception as e:
            logger.error(
                f"Failed to auto-complete fields {field_names} for {draft_id}: {e}",
                extra={"draft_id": draft_id},
            )
            raise

    def writing_assistance(
        self,
        draft_id: str,
        section_id: str,
        reference_text: Optional[str] = None,
    ) -> WritingAssistance:
        """Writing feedback for one section of a stored draft."""
        draft, template = self.load(draft_id)
        return self.engine.assist_writing(template, draft, section_id, reference_text=reference_text)

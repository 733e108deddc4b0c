"""Built-in application templates."""

from grantscore.models import Section, SectionKind, Template


def default_template(grant_id: str) -> Template:
    """Standard three-section application used when a grant has no template."""
    return Template(
        id=f"template-{grant_id}",
        grant_id=grant_id,
        template_type="form",
        title="Standard Grant Application",
        description="Standard grant application form",
        sections=[
            Section(
                id="project_title",
                title="Project Title",
                description="Brief, descriptive title for your project",
                kind=SectionKind.TEXT,
                required=True,
                max_length=200,
                order=1,
            ),
            Section(
                id="project_summary",
                title="Project Summary",
                description="Executive summary of your project",
                kind=SectionKind.NARRATIVE,
                required=True,
                max_length=1000,
                order=2,
            ),
            Section(
                id="budget_total",
                title="Total Budget",
                description="Total project budget requested",
                kind=SectionKind.NUMBER,
                required=True,
                order=3,
            ),
        ],
        required_fields=["project_title", "project_summary", "budget_total"],
        optional_fields=[],
        validation_rules=[],
    )

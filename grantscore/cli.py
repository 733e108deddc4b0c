"""CLI application using Typer."""

import json
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from grantscore.config import get_config
from grantscore.database import Database
from grantscore.engine import ApplicationEngine
from grantscore.models import Draft, ResultStatus, ScoreReport, Template
from grantscore.utils.logging_config import setup_logging

app = typer.Typer(
    name="grantscore",
    help="Validate and score grant application drafts",
    no_args_is_help=True,
)
console = Console()

STATUS_STYLES = {
    ResultStatus.PASS: "green",
    ResultStatus.WARNING: "yellow",
    ResultStatus.FAIL: "red",
}


def get_db() -> Database:
    """Get database instance."""
    config = get_config()
    db = Database(config.db_path)
    db.connect()
    db.create_schema()
    return db


def _load_model(model, path: Path):
    try:
        return model.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        console.print(f"[red]Invalid {model.__name__.lower()} file {path}:[/red]\n{e}")
        raise typer.Exit(1)


def _print_report(report: ScoreReport) -> None:
    table = Table(title="Validation Results")
    table.add_column("Field", style="cyan")
    table.add_column("Rule", style="magenta")
    table.add_column("Status", justify="center")
    table.add_column("Message", style="white", width=50)

    for result in report.validation_results:
        style = STATUS_STYLES[result.status]
        table.add_row(
            result.field_name,
            result.rule_kind,
            f"[{style}]{result.status.value}[/{style}]",
            result.message,
        )

    console.print(table)

    score_color = "green" if report.overall_score >= 0.7 else "yellow" if report.overall_score >= 0.4 else "red"
    console.print(f"\n[bold]Overall score:[/bold] [{score_color}]{report.overall_score:.2f}[/{score_color}]")
    console.print(f"[bold]Completion:[/bold] {report.completion_percentage}%")

    if report.critical_issues:
        console.print("\n[bold red]Critical issues:[/bold red]")
        for issue in report.critical_issues:
            console.print(f"  - {issue}")

    if report.prioritized_improvements:
        console.print("\n[bold]Next improvements:[/bold]")
        for i, improvement in enumerate(report.prioritized_improvements, 1):
            console.print(f"  {i}. {improvement}")


@app.command()
def validate(
    template_file: Path = typer.Argument(..., help="Template JSON file", exists=True, dir_okay=False),
    draft_file: Path = typer.Argument(..., help="Draft JSON file", exists=True, dir_okay=False),
    reference: Optional[str] = typer.Option(
        None,
        "--reference",
        "-r",
        help="Reference text for keyword scoring (defaults to template title and description)",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Validate a draft against a template."""
    config = get_config()
    setup_logging(config.log_file, config.log_level, config.json_logs)

    template = _load_model(Template, template_file)
    draft = _load_model(Draft, draft_file)

    report = ApplicationEngine().validate(template, draft, reference_text=reference)

    if json_output:
        console.print_json(report.model_dump_json())
    else:
        _print_report(report)


@app.command()
def score(
    text_file: Path = typer.Argument(..., help="Text file to score", exists=True, dir_okay=False),
    reference: str = typer.Option("", "--reference", "-r", help="Grant title/description to match against"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Score a piece of application text."""
    config = get_config()
    setup_logging(config.log_file, config.log_level, config.json_logs)

    text = text_file.read_text(encoding="utf-8")
    analysis = ApplicationEngine().score_content(text, reference)

    if json_output:
        console.print_json(analysis.model_dump_json())
        return

    readability = analysis.readability
    console.print(f"[bold]Estimated score:[/bold] {analysis.estimated_score:.2f}")
    console.print(f"[bold]Words:[/bold] {analysis.word_count}")
    console.print(f"[bold]Readability:[/bold] {readability.score} ({readability.grade_level})")
    for hint in readability.improvements:
        console.print(f"  [yellow]- {hint}[/yellow]")

    keywords = analysis.keyword_optimization
    if keywords.keyword_density:
        table = Table(title="Keyword Density")
        table.add_column("Keyword", style="cyan")
        table.add_column("Density %", style="green", justify="right")
        for keyword, density in keywords.keyword_density.items():
            table.add_row(keyword, f"{density:.1f}")
        console.print(table)

    if keywords.missing_keywords:
        console.print(f"[red]Missing keywords:[/red] {', '.join(keywords.missing_keywords)}")

    for suggestion in analysis.improvement_suggestions:
        console.print(f"[dim]- {suggestion}[/dim]")


@app.command()
def plan(
    template_file: Path = typer.Argument(..., help="Template JSON file", exists=True, dir_okay=False),
    draft_file: Optional[Path] = typer.Argument(None, help="Draft JSON file", exists=True, dir_okay=False),
):
    """Estimate remaining effort for a draft."""
    template = _load_model(Template, template_file)
    form_data = _load_model(Draft, draft_file).form_data if draft_file else {}

    form_plan = ApplicationEngine().plan(template, form_data)

    console.print(f"[bold]Estimated time remaining:[/bold] {form_plan.estimated_completion_minutes} minutes")
    if form_plan.next_recommended_sections:
        console.print(f"[bold]Work on next:[/bold] {', '.join(form_plan.next_recommended_sections)}")


@app.command(name="import-template")
def import_template(
    template_file: Path = typer.Argument(..., help="Template JSON file", exists=True, dir_okay=False),
):
    """Store a template in the local database."""
    template = _load_model(Template, template_file)

    db = get_db()
    try:
        template_id = db.save_template(template)
        console.print(f"[green]Stored template {template_id}[/green]")
    finally:
        db.close()


@app.command(name="import-draft")
def import_draft(
    draft_file: Path = typer.Argument(..., help="Draft JSON file", exists=True, dir_okay=False),
):
    """Store a draft in the local database."""
    draft = _load_model(Draft, draft_file)

    db = get_db()
    try:
        draft_id = db.save_draft(draft)
        console.print(f"[green]Stored draft {draft_id}[/green]")
    finally:
        db.close()


@app.command(name="check-draft")
def check_draft(
    draft_id: str = typer.Argument(..., help="Stored draft ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Validate a stored draft and save the results on it."""
    from grantscore.service import ApplicationService

    config = get_config()
    setup_logging(config.log_file, config.log_level, config.json_logs)

    db = get_db()
    try:
        report = ApplicationService(db, config=config).validate_draft(draft_id)
    except LookupError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    finally:
        db.close()

    if json_output:
        console.print_json(report.model_dump_json())
    else:
        _print_report(report)


@app.command()
def autocomplete(
    draft_id: str = typer.Argument(..., help="Stored draft ID"),
    fields: List[str] = typer.Argument(..., help="Field ids or section titles to complete"),
    context_file: Optional[Path] = typer.Option(
        None,
        "--context",
        "-c",
        help="JSON file with organization profile or grant details",
        exists=True,
        dir_okay=False,
    ),
):
    """Auto-complete draft fields with the configured LLM."""
    from grantscore.llm import LLMFieldCompleter, OllamaClient
    from grantscore.service import ApplicationService

    config = get_config()
    setup_logging(config.log_file, config.log_level, config.json_logs)

    client = OllamaClient.from_config(config)
    if not client.check_health():
        console.print(f"[red]Ollama is not reachable at {config.ollama_host}[/red]")
        raise typer.Exit(1)

    context = json.loads(context_file.read_text(encoding="utf-8")) if context_file else None
    engine = ApplicationEngine(completer=LLMFieldCompleter(client, config))

    db = get_db()
    try:
        completions = ApplicationService(db, engine, config).auto_complete_fields(
            draft_id, fields, context=context
        )
    except LookupError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    finally:
        db.close()

    table = Table(title=f"Auto-completed Fields ({len(completions)} of {len(fields)})")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white", width=50)
    table.add_column("Confidence", justify="right")
    table.add_column("Applied", justify="center")

    for field_name, completion in completions.items():
        value = str(completion.value)
        value = value[:47] + "..." if len(value) > 50 else value
        applied = completion.confidence > config.auto_apply_confidence
        conf_color = "green" if completion.confidence >= 0.8 else "yellow" if completion.confidence >= 0.6 else "red"
        table.add_row(
            field_name,
            value,
            f"[{conf_color}]{completion.confidence:.2f}[/{conf_color}]",
            "yes" if applied else "no",
        )

    console.print(table)


if __name__ == "__main__":
    app()

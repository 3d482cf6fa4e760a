import typer
from rich.console import Console
from rich.table import Table
from typing import Optional
from datetime import datetime, date

from lingo_review.database import SessionLocal, init_db
from lingo_review.config import settings
from lingo_review.logging_config import configure_logging
from lingo_review.crud import (
    create_learner, get_learner,
    create_scenario, get_scenario, add_vocabulary_items, get_vocabulary_items,
    grade_vocabulary, get_due_reviews, get_learner_reviews,
    get_progress, submit_quiz, prune_orphaned_reviews
)
from lingo_review.schemas import LearnerCreate, ScenarioCreate, QuizSubmit
from lingo_review.sm2 import InvalidQuality, Quality, SM2Algorithm, ReviewState
from lingo_review.vocabulary_importer import VocabularyImporter

app = typer.Typer(help="Lingo Review CLI - spaced repetition scheduling for vocabulary")
console = Console()

@app.callback()
def main():
    configure_logging()

@app.command()
def init():
    """Initialize database tables"""
    init_db()
    console.print("[green]✓[/green] Database initialized successfully!")

@app.command()
def reset_db():
    """Delete all data and reinitialize database (WARNING: irreversible!)"""
    confirm = typer.confirm("⚠️  This will DELETE ALL DATA. Are you sure?")
    if not confirm:
        console.print("[yellow]Cancelled.[/yellow]")
        return

    from lingo_review.database import engine, Base
    import lingo_review.models  # noqa: F401
    console.print("[yellow]Dropping all tables...[/yellow]")
    Base.metadata.drop_all(bind=engine)
    console.print("[yellow]Recreating tables...[/yellow]")
    Base.metadata.create_all(bind=engine)
    console.print("[green]✓[/green] Database reset complete! All data deleted.")

@app.command("create-learner")
def create_profile(
    username: str = typer.Option(..., prompt="Username"),
    email: str = typer.Option(..., prompt="Email")
):
    """Create a new learner"""
    db = SessionLocal()
    try:
        learner = create_learner(db, LearnerCreate(username=username, email=email))
        console.print(f"[green]✓[/green] Learner created successfully! Learner ID: {learner.id}")
    finally:
        db.close()

@app.command()
def add_scenario(
    scenario_id: str = typer.Option(..., prompt="Scenario ID (e.g., cafe)"),
    title: str = typer.Option(..., prompt="Title"),
    language: str = typer.Option(settings.default_language, help="Language of the scenario"),
    description: str = typer.Option("", help="Short description"),
    icon: str = typer.Option("", help="Icon name")
):
    """Add a scenario to the vocabulary catalog"""
    db = SessionLocal()
    try:
        if get_scenario(db, scenario_id):
            console.print(f"[red]✗[/red] Scenario '{scenario_id}' already exists")
            raise typer.Exit(code=1)
        scenario = create_scenario(db, ScenarioCreate(
            id=scenario_id,
            title=title,
            description=description,
            icon=icon,
            language=language.lower()
        ))
        console.print(f"[green]✓[/green] Scenario '{scenario.title}' added ({scenario.language})")
    finally:
        db.close()

@app.command()
def import_vocabulary(
    file_path: str = typer.Option(..., prompt="Vocabulary file path (.csv or .xlsx)"),
    scenario_id: Optional[str] = typer.Option(None, help="Scenario for rows without a scenario_id column"),
    language: Optional[str] = typer.Option(None, help="Language for rows without a language column")
):
    """Import vocabulary items from a CSV or Excel sheet"""
    db = SessionLocal()
    try:
        console.print(f"[yellow]Parsing vocabulary sheet...[/yellow]")
        try:
            items = VocabularyImporter.auto_parse(file_path, scenario_id, language)
        except ValueError as e:
            console.print(f"[red]✗[/red] Error: {e}")
            raise typer.Exit(code=1)

        missing = sorted({item.scenario_id for item in items if not get_scenario(db, item.scenario_id)})
        if missing:
            console.print(f"[red]✗[/red] Unknown scenarios: {', '.join(missing)}")
            raise typer.Exit(code=1)

        count = add_vocabulary_items(db, items)
        console.print(f"[green]✓[/green] Imported {count} vocabulary items")
    finally:
        db.close()

@app.command()
def grade(
    learner_id: int = typer.Option(..., help="Learner ID"),
    vocabulary_id: str = typer.Option(..., help="Vocabulary item ID"),
    quality: int = typer.Option(..., help="Recall quality 0-5 (0=blackout, 5=perfect)"),
    at: Optional[str] = typer.Option(None, help="Time of the attempt (ISO format), default: now")
):
    """Grade a recall attempt and schedule the next review"""
    db = SessionLocal()
    try:
        try:
            now = datetime.fromisoformat(at) if at else datetime.now()
        except ValueError:
            console.print(f"[red]✗[/red] Invalid time: {at!r} (expected ISO format, e.g. 2026-03-02T09:00:00)")
            raise typer.Exit(code=1)
        try:
            record = grade_vocabulary(db, learner_id, vocabulary_id, quality, now)
        except InvalidQuality as e:
            console.print(f"[red]✗[/red] {e}")
            raise typer.Exit(code=1)
        except LookupError as e:
            console.print(f"[red]✗[/red] {e.args[0]}")
            raise typer.Exit(code=1)

        label = Quality(quality).name.replace("_", " ").lower()
        console.print(f"[green]✓[/green] Graded {vocabulary_id}: {quality}/5 ({label})")
        console.print(f"  Repetitions: {record.repetitions}")
        console.print(f"  Next review: {record.next_review_date} (in {record.interval} days)")
        console.print(f"  Easiness: {record.ease_factor:.2f}")
    finally:
        db.close()

@app.command()
def due(
    learner_id: int = typer.Option(..., help="Learner ID"),
    as_of: Optional[str] = typer.Option(None, help="Date (YYYY-MM-DD), default: today"),
    language: Optional[str] = typer.Option(None, help="Only items in this language"),
    limit: Optional[int] = typer.Option(None, min=1, help="Maximum number of items")
):
    """List vocabulary due for review"""
    db = SessionLocal()
    try:
        try:
            as_of_date = datetime.strptime(as_of, "%Y-%m-%d").date() if as_of else date.today()
        except ValueError:
            console.print(f"[red]✗[/red] Invalid date: {as_of!r} (expected YYYY-MM-DD)")
            raise typer.Exit(code=1)
        records = get_due_reviews(db, learner_id, as_of_date, language=language, limit=limit)

        if not records:
            console.print(f"[green]Nothing due for review on {as_of_date}[/green]")
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Word", style="cyan")
        table.add_column("Translation", style="green")
        table.add_column("Due Date", style="yellow")
        table.add_column("Days Overdue", style="red")
        table.add_column("State", style="blue")

        items = get_vocabulary_items(db, [record.vocabulary_id for record in records])
        for record in records:
            item = items.get(record.vocabulary_id)
            days_overdue = SM2Algorithm.get_days_overdue(record, as_of_date)
            table.add_row(
                item.word if item else record.vocabulary_id,
                item.translation if item else "",
                str(record.next_review_date),
                str(days_overdue) if days_overdue > 0 else "Today",
                SM2Algorithm.review_state(record).value
            )

        console.print(table)
    finally:
        db.close()

@app.command("submit-quiz")
def submit_quiz_result(
    learner_id: int = typer.Option(..., help="Learner ID"),
    scenario_id: str = typer.Option(..., help="Scenario ID"),
    score: int = typer.Option(..., help="Correct answers"),
    total: int = typer.Option(..., help="Total questions"),
    difficulty: str = typer.Option("beginner", help="Quiz difficulty")
):
    """Record a finished scenario quiz"""
    db = SessionLocal()
    try:
        scenario = get_scenario(db, scenario_id)
        if not scenario:
            console.print(f"[red]✗[/red] Scenario '{scenario_id}' not found")
            raise typer.Exit(code=1)

        result = QuizSubmit(scenario_id=scenario_id, difficulty=difficulty, score=score, total_questions=total)
        progress = submit_quiz(db, learner_id, scenario.language, result, date.today())

        status = "completed" if scenario_id in progress.completed_scenarios else "not yet passed"
        console.print(f"[green]✓[/green] Quiz recorded: {score}/{total} - scenario {status}")
        console.print(f"  Current streak: {progress.current_streak} days")
    finally:
        db.close()

@app.command()
def view_progress(
    learner_id: int,
    language: str = typer.Option(settings.default_language, help="Language")
):
    """View learning progress and review states"""
    db = SessionLocal()
    try:
        learner = get_learner(db, learner_id)
        if not learner:
            console.print(f"[red]✗[/red] Learner ID {learner_id} not found")
            return

        progress = get_progress(db, learner_id, language)
        reviews = get_learner_reviews(db, learner_id)
        due_reviews = SM2Algorithm.due_items(reviews, date.today())
        db.commit()

        console.print(f"\n[bold]Learning Progress - {learner.username} ({language})[/bold]\n")

        # Statistics
        console.print(f"[cyan]Statistics:[/cyan]")
        console.print(f"  Current streak: {progress.current_streak} days")
        console.print(f"  Scenarios completed: {len(progress.completed_scenarios)}")
        console.print(f"  Words mastered: {progress.total_words_learned}")
        console.print(f"  Words tracked: {len(reviews)}")
        console.print(f"  Due for review: {len(due_reviews)}")

        if reviews:
            avg_ef = sum(r.ease_factor for r in reviews) / len(reviews)
            console.print(f"  Average easiness: {avg_ef:.2f}")

            counts = {state: 0 for state in ReviewState}
            for record in reviews:
                counts[SM2Algorithm.review_state(record)] += 1
            console.print(f"\n[cyan]Review states:[/cyan]")
            for state, count in counts.items():
                console.print(f"  {state.value}: {count}")
    finally:
        db.close()

@app.command()
def prune():
    """Delete review records left behind by removed learners or vocabulary"""
    db = SessionLocal()
    try:
        removed = prune_orphaned_reviews(db)
        console.print(f"[green]✓[/green] Removed {removed} orphaned review records")
    finally:
        db.close()

if __name__ == "__main__":
    app()

"""CLI commands for the wedding invitation RSVP pipeline."""

import asyncio
from datetime import datetime, timezone
from pathlib import Path

import typer

from invitation.config.logging import setup_logging
from invitation.config.settings import settings
from invitation.rsvp.controller import SubmissionController
from invitation.rsvp.countdown import countdown as time_left
from invitation.rsvp.countdown import format_date
from invitation.rsvp.dtos import WEDDING, Attending, RsvpDraft, SubmissionStatus
from invitation.rsvp.policies import is_post_enabled
from invitation.rsvp.storage import JsonFileDraftStore

app = typer.Typer(help="CLI commands for the wedding invitation RSVP pipeline")

STATUS_COLORS = {
    SubmissionStatus.SUCCESS: typer.colors.GREEN,
    SubmissionStatus.ERROR: typer.colors.RED,
}


@app.callback()
def main():
    setup_logging()


@app.command()
def submit(
    name: str = typer.Option(
        None,
        "--name",
        "-n",
        help="Guest first and last name (defaults to the saved draft)",
    ),
    attending: Attending = typer.Option(
        None,
        "--attending",
        "-a",
        help="taip = yes, gal = not sure yet, ne = no",
    ),
    guests: int = typer.Option(
        None,
        "--guests",
        "-g",
        help="Number of people including the guest (1-6)",
    ),
    diet: str = typer.Option(
        None,
        "--diet",
        "-d",
        help="Dietary notes",
    ),
    note: str = typer.Option(
        None,
        "--note",
        help="Message for the couple",
    ),
    draft_file: Path = typer.Option(
        None,
        "--draft-file",
        "-f",
        help="JSON file the draft is loaded from and saved to",
    ),
):
    """Submit one RSVP through the same pipeline the invitation uses."""
    store = JsonFileDraftStore(draft_file) if draft_file else None
    draft = store.load() if store else RsvpDraft()

    changes = {
        "name": name,
        "attending": attending.value if attending else None,
        "guests": guests,
        "diet": diet,
        "note": note,
    }
    draft = draft.updated(**{key: value for key, value in changes.items() if value is not None})
    if store:
        store.save(draft)

    controller = SubmissionController(settings)
    ok = asyncio.run(controller.submit(draft))

    typer.secho(
        controller.message,
        fg=STATUS_COLORS.get(controller.status, typer.colors.YELLOW),
    )
    if not ok:
        raise typer.Exit(1)


@app.command()
def endpoint():
    """Show where RSVPs are posted with the current configuration."""
    controller = SubmissionController(settings)

    typer.secho(f"Environment: {settings.ENVIRONMENT}", fg=typer.colors.BLUE)
    typer.secho(f"RSVP URL: {controller.endpoint}", fg=typer.colors.CYAN)
    if not controller.endpoint.startswith(("http://", "https://")):
        typer.secho(f"  (relative to {settings.APP_ORIGIN})", fg=typer.colors.CYAN)

    if is_post_enabled(settings):
        typer.secho("Posting: enabled", fg=typer.colors.GREEN)
    else:
        typer.secho("Posting: disabled, RSVPs stay on this device", fg=typer.colors.YELLOW)


@app.command()
def countdown():
    """Show the time left until the ceremony."""
    left = time_left(WEDDING.date_iso, datetime.now(timezone.utc))

    typer.secho(f"{WEDDING.groom} & {WEDDING.bride}", fg=typer.colors.MAGENTA)
    typer.secho(f"  Date: {format_date(WEDDING.date)}", fg=typer.colors.BLUE)
    typer.secho(f"  Church: {WEDDING.church_name}", fg=typer.colors.BLUE)
    if left.done:
        typer.secho("The day has come!", fg=typer.colors.GREEN)
        return
    typer.secho(
        f"  {left.days}d {left.hours}h {left.minutes}m {left.seconds}s to go",
        fg=typer.colors.CYAN,
    )


if __name__ == "__main__":
    app()

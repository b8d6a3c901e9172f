"""Diary CLI - Personal Diary."""

import json
import logging
import sys
from datetime import date, datetime

import click

from .config import load_config
from .core.entry import DiaryEntry
from .core.settings import MAX_FONT_SIZE, MIN_FONT_SIZE
from .workflows import (
    get_entry_store,
    get_settings_store,
    load_font_size,
    open_entry,
    save_entry,
)

DATE_TYPE = click.DateTime(formats=["%Y-%m-%d"])
FONT_SIZE_TYPE = click.IntRange(MIN_FONT_SIZE, MAX_FONT_SIZE)


class ClickPresenter:
    """
    Terminal presenter.

    Implements Presenter protocol with click prompts and echo.
    """

    def __init__(self, err: bool = False):
        self.err = err

    def pick_date(self) -> date:
        value = click.prompt("Date (YYYY-MM-DD)", type=DATE_TYPE, default=date.today().isoformat())
        return value.date() if isinstance(value, datetime) else value

    def notify(self, message: str) -> None:
        click.echo(message, err=self.err)


def _resolve_date(value: datetime | None) -> date:
    return value.date() if value else date.today()


def _stores():
    config = load_config()
    return get_entry_store(config), get_settings_store(config)


@click.group()
@click.version_option(package_name="diary")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """Diary - Personal Diary CLI."""
    if verbose:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@click.argument("text", required=False)
@click.option("--date", "entry_date", type=DATE_TYPE, help="Entry date (default: today)")
@click.option("--pick-date", is_flag=True, help="Prompt for the entry date")
@click.option("--font-size", type=FONT_SIZE_TYPE, help=f"Font size to remember ({MIN_FONT_SIZE}-{MAX_FONT_SIZE})")
def write(text: str | None, entry_date: datetime | None, pick_date: bool, font_size: int | None):
    """Save a diary entry. Reads TEXT from stdin when omitted."""
    presenter = ClickPresenter()
    day = presenter.pick_date() if pick_date and entry_date is None else _resolve_date(entry_date)

    if text is None:
        text = click.get_text_stream("stdin").read()

    entries, settings = _stores()
    if font_size is None:
        font_size = load_font_size(settings)
    try:
        save_entry(entries, settings, day, text, font_size)
    except OSError as e:
        click.echo(f"Error: could not save entry for {day.isoformat()}: {e}", err=True)
        sys.exit(1)

    presenter.notify("Diary entry saved!")


@main.command()
@click.option("--date", "entry_date", type=DATE_TYPE, help="Entry date (default: today)")
def edit(entry_date: datetime | None):
    """Edit a day's entry in $EDITOR."""
    day = _resolve_date(entry_date)
    entries, settings = _stores()

    existing = open_entry(entries, day)
    edited = click.edit(existing, extension=".txt")
    if edited is None or edited == existing:
        click.echo("No changes.")
        return

    try:
        save_entry(entries, settings, day, edited, load_font_size(settings))
    except OSError as e:
        click.echo(f"Error: could not save entry for {day.isoformat()}: {e}", err=True)
        sys.exit(1)

    click.echo("Diary entry saved!")


@main.command()
@click.option("--date", "entry_date", type=DATE_TYPE, help="Entry date (default: today)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def read(entry_date: datetime | None, as_json: bool):
    """Show a day's entry."""
    day = _resolve_date(entry_date)
    entries, _ = _stores()

    text = entries.read(day)
    if text is None:
        click.echo(f"No entry for {day.isoformat()}.", err=True)
        sys.exit(1)

    entry = DiaryEntry(date=day, text=text)
    if as_json:
        click.echo(
            json.dumps(
                {"date": entry.date.isoformat(), "key": entry.key, "text": entry.text},
                indent=2,
                ensure_ascii=False,
            )
        )
    else:
        click.echo(text, nl=not text.endswith("\n"))


@main.command("font-size")
@click.argument("value", type=FONT_SIZE_TYPE, required=False)
def font_size(value: int | None):
    """Show or set the display font size."""
    _, settings = _stores()

    if value is None:
        click.echo(load_font_size(settings))
        return

    try:
        settings.set_font_size(value)
    except OSError as e:
        click.echo(f"Error: could not save font size: {e}", err=True)
        sys.exit(1)
    click.echo(f"Font size set to {value}.")


@main.command()
@click.option("--date", "entry_date", type=DATE_TYPE, help="Entry date (default: today)")
def path(entry_date: datetime | None):
    """Print where a day's entry is stored."""
    entries, _ = _stores()
    click.echo(entries.path_for_date(_resolve_date(entry_date)))


@main.command()
def bot():
    """Run the Telegram bot."""
    from .telegram_bot import run_bot

    try:
        run_bot()
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()

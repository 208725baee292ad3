"""Interactive editing session for one day, with undo."""

from datetime import date

import click

from daybook.cli.commands.day import render_day
from daybook.cli.context import get_converter, get_ledger
from daybook.cli.date_filters import parse_date_or_exit
from daybook.cli.error_handling import domain_errors
from daybook.domain.currency import CurrencyConverter
from daybook.domain.entities import Day, Entry
from daybook.domain.errors import DomainError, NotFoundError, ValidationError, row_not_found
from daybook.domain.ledger import LedgerService
from daybook.domain.undo import UndoManager
from daybook.utils.amount_parser import parse_amount
from daybook.utils.formatting import format_plain_cad, format_plain_idr, truncate

SESSION_HELP = """Commands:
  a        add an entry
  e ROW    edit the entry at ROW
  d ROW    delete the entry at ROW
  s        set screen time
  j        replace the journal ('-' clears it)
  u        undo the last change
  p        print the day
  h        show this help
  q        quit"""

CLEAR_JOURNAL = "-"


def _optional_amount(text: str):
    text = text.strip()
    return parse_amount(text) if text else None


class EditSession:
    """Edits one day and records every change for undo.

    The undo history lives only as long as the session.
    """

    def __init__(
        self,
        ledger: LedgerService,
        converter: CurrencyConverter,
        day_date: date,
        undo: UndoManager | None = None,
    ):
        self.ledger = ledger
        self.converter = converter
        self.day_date = day_date
        self.undo_manager = undo or UndoManager(ledger)
        self.commands = {
            "a": self.add,
            "e": self.edit,
            "d": self.delete,
            "s": self.screen_time,
            "j": self.journal,
            "u": self.undo,
            "p": self.show,
            "h": self.help,
        }

    @property
    def day(self) -> Day:
        return self.ledger.get_day(self.day_date)

    def _entry_at(self, row_text: str) -> Entry:
        try:
            row = int(row_text)
        except ValueError as e:
            raise ValidationError(f"Row must be a number, got '{row_text}'") from e
        entries = self.day.entries
        if not 1 <= row <= len(entries):
            raise NotFoundError(row_not_found(row, self.day_date))
        return entries[row - 1]

    def run(self) -> None:
        self.show()
        click.echo(self.converter.status_message())
        click.echo(SESSION_HELP)
        while True:
            line = click.prompt("", prompt_suffix="> ", default="", show_default=False).strip()
            if not line:
                continue
            name, _, argument = line.partition(" ")
            if name == "q":
                return
            command = self.commands.get(name)
            if command is None:
                click.echo(f"Unknown command '{name}', 'h' lists commands")
                continue
            try:
                if name in ("e", "d"):
                    command(argument.strip())
                else:
                    command()
            except DomainError as e:
                click.echo(f"Error: {e}", err=True)

    def show(self) -> None:
        render_day(self.day)

    def help(self) -> None:
        click.echo(SESSION_HELP)

    def add(self) -> None:
        description = click.prompt("Description").strip()
        if not description:
            raise ValidationError("Description must not be empty")
        cad = _optional_amount(click.prompt("CAD", default="", show_default=False))
        idr = _optional_amount(click.prompt("IDR", default="", show_default=False))
        cad, idr = self.converter.fill_amounts(cad, idr)

        entry = self.ledger.add_entry(self.day_date, description, cad, idr)
        self.undo_manager.record_add_entry(self.day_date, entry)
        click.echo(f"Added '{truncate(entry.description, 20)}'")

    def edit(self, row_text: str) -> None:
        """Prompt for new values; a changed amount alone reconverts the other side."""
        entry = self._entry_at(row_text)
        before = entry.clone()
        old_cad = format_plain_cad(entry.cad)
        old_idr = format_plain_idr(entry.idr)

        description = click.prompt("Description", default=entry.description).strip()
        if not description:
            raise ValidationError("Description must not be empty")
        cad_text = click.prompt("CAD", default=old_cad).strip()
        idr_text = click.prompt("IDR", default=old_idr).strip()

        cad = parse_amount(cad_text)
        idr = parse_amount(idr_text)
        if cad_text != old_cad and idr_text == old_idr:
            idr = None
        elif idr_text != old_idr and cad_text == old_cad:
            cad = None
        cad, idr = self.converter.fill_amounts(cad, idr)

        edited = before.clone()
        edited.description = description
        edited.cad = cad
        edited.idr = idr
        self.ledger.update_entry(self.day_date, edited)
        self.undo_manager.record_edit_entry(self.day_date, before, edited)
        click.echo(f"Updated '{truncate(edited.description, 20)}'")

    def delete(self, row_text: str) -> None:
        entry = self._entry_at(row_text)
        if not click.confirm(f"Delete '{entry.description}'?"):
            return
        self.undo_manager.record_delete_entry(self.day_date, entry)
        self.ledger.remove_entry(self.day_date, entry.id)
        click.echo(f"Deleted '{truncate(entry.description, 20)}'")

    def screen_time(self) -> None:
        old_value = self.day.screen_time
        new_value = click.prompt("Screen time", default=old_value).strip()
        if new_value == old_value:
            return
        self.ledger.set_screen_time(self.day_date, new_value)
        self.undo_manager.record_set_screen_time(self.day_date, old_value, new_value)
        if not self.day.entries:
            click.echo("Note: screen time is stored with entries; add an entry to keep it.")
        click.echo(f"Screen time set to '{new_value}'")

    def journal(self) -> None:
        old_value = self.day.journal
        text = click.prompt(
            f"Journal ('{CLEAR_JOURNAL}' clears)", default=old_value, show_default=False
        )
        new_value = "" if text.strip() == CLEAR_JOURNAL else text
        if new_value == old_value:
            return
        self.ledger.set_journal(self.day_date, new_value)
        self.undo_manager.record_set_journal(self.day_date, old_value, new_value)
        click.echo("Journal cleared" if not new_value else "Journal saved")

    def undo(self) -> None:
        try:
            message = self.undo_manager.undo()
        except DomainError as e:
            click.echo(f"Undo failed: {e}", err=True)
            return
        click.echo(message)


@click.command("edit")
@click.argument("day_date", required=False)
@click.option("--refresh/--no-refresh", default=True, help="Fetch the latest rate in the background")
@click.pass_context
def edit_day(ctx, day_date: str | None, refresh: bool):
    """Edit a day interactively, with undo (default today).

    Example:
        daybook edit yesterday
    """
    target = parse_date_or_exit(ctx, day_date)
    converter = get_converter(ctx)
    refresh_thread = converter.start_background_refresh() if refresh else None

    try:
        with domain_errors(ctx):
            EditSession(get_ledger(ctx), converter, target).run()
    finally:
        if refresh_thread is not None:
            # Let a pending rate cache write finish before exiting
            refresh_thread.join()


def register_commands(cli):
    """Register edit command with main CLI."""
    cli.add_command(edit_day)

# ruff: noqa: I001
"""CLI for ``starling_spaces``.

Command handlers (``cmd_*``) hold the behavior and return a process exit
code; the Typer commands at the bottom are thin wrappers. The root callback
loads a local ``.env`` with python-dotenv (existing variables win) and sets
up logging before any command runs.

Errors raised by the library (:class:`~starling_spaces.errors.StarlingSpacesError`)
are reported as ``Error: ...`` on stderr with exit status 1.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

import typer
from dotenv import load_dotenv

from .browser import BrowserSession
from .categories import category_choices, validate_category
from .client import StarlingClient
from .edit import set_category
from .errors import StarlingSpacesError
from .insights import spending_insights
from .logging_setup import configure_logging, get_logger
from .models import ByAccountAndCategory
from .settings import Settings, resolve_concurrency
from .spaces import load_space_rows
from .views import INSIGHT_COLUMNS, SPACE_COLUMNS, TRANSACTION_COLUMNS, render_table

if TYPE_CHECKING:
    from prompt_toolkit import PromptSession

logger = get_logger("starling_spaces.cli")


def _make_client(settings: Settings) -> StarlingClient:
    """Build the API client (tests monkeypatch this to inject a fake)."""

    return StarlingClient.from_settings(settings)


def _fail(msg: str) -> int:
    print(f"Error: {msg}", file=sys.stderr)
    return 1


def _width(settings: Settings, concurrency: int | None) -> int:
    if concurrency is None:
        return settings.balance_concurrency
    return resolve_concurrency(concurrency)


# ---- Command handlers --------------------------------------------------------


def cmd_spaces(
    settings: Settings,
    *,
    include_accounts: bool | None = None,
    concurrency: int | None = None,
) -> int:
    """Print the aggregated space list (goals, spaces, optionally accounts)."""

    include = settings.include_accounts if include_accounts is None else include_accounts
    width = _width(settings, concurrency)
    try:
        client = _make_client(settings)
        with client:
            rows = load_space_rows(client, include_accounts=include, concurrency=width)
    except StarlingSpacesError as e:
        return _fail(str(e))

    print(render_table(SPACE_COLUMNS, rows))
    return 0


def cmd_transactions(settings: Settings, *, account_id: str, category_id: str) -> int:
    """Print the last 30 days of one account/category feed."""

    try:
        client = _make_client(settings)
        with client, BrowserSession(client) as session:
            rows = session.select_row(ByAccountAndCategory(account_id, category_id))
    except StarlingSpacesError as e:
        return _fail(str(e))

    print(render_table(TRANSACTION_COLUMNS, rows))
    return 0


def cmd_set_category(
    settings: Settings,
    *,
    account_id: str,
    category_id: str,
    txn_id: str,
    new_category: str,
) -> int:
    """Recategorize one transaction, then print the refreshed feed."""

    try:
        validate_category(new_category)
        client = _make_client(settings)
        with client, BrowserSession(client) as session:
            session.select_row(ByAccountAndCategory(account_id, category_id))
            found = set_category(client, session, txn_id, new_category)
            rows = list(session.rows)
    except StarlingSpacesError as e:
        return _fail(str(e))

    print(render_table(TRANSACTION_COLUMNS, rows))
    if found is None:
        print(f"Transaction {txn_id} is no longer in this category's 30-day window.")
    return 0


def cmd_categories() -> int:
    for code, label in category_choices():
        print(f"{code}\t{label}")
    return 0


def cmd_insights(settings: Settings, *, account_id: str | None, year: int, month: str) -> int:
    """Print one month's spending breakdown by category."""

    try:
        client = _make_client(settings)
        with client:
            if account_id is None:
                accounts = client.list_accounts()
                if not accounts:
                    return _fail("The API returned no accounts")
                account_id = accounts[0].account_uid
            rows = spending_insights(client, account_id, year=year, month=month)
    except StarlingSpacesError as e:
        return _fail(str(e))

    print(render_table(INSIGHT_COLUMNS, rows))
    return 0


def cmd_browse(
    settings: Settings,
    *,
    include_accounts: bool | None = None,
    concurrency: int | None = None,
    session: PromptSession | None = None,
) -> int:
    """Interactive loop: space list → transactions → optional category edit.

    ``session`` supplies the prompt input/output (tests pass a pipe-backed one).
    """

    from .term_ui import select_row, select_spending_category

    include = settings.include_accounts if include_accounts is None else include_accounts
    width = _width(settings, concurrency)

    try:
        client = _make_client(settings)
    except StarlingSpacesError as e:
        return _fail(str(e))

    with client:
        try:
            accounts = client.list_accounts()
        except StarlingSpacesError as e:
            return _fail(str(e))
        primary = accounts[0].account_uid if accounts else None

        with BrowserSession(client, primary_account_id=primary) as browser:
            while True:
                try:
                    space_rows = load_space_rows(
                        client, include_accounts=include, concurrency=width, accounts=accounts
                    )
                except StarlingSpacesError as e:
                    return _fail(str(e))

                identity = select_row(
                    space_rows, SPACE_COLUMNS, title="\nSpaces", session=session
                )
                if identity is None:
                    return 0

                try:
                    browser.select_row(identity)
                except StarlingSpacesError as e:
                    _fail(str(e))
                    continue

                while True:
                    txn_id = select_row(
                        browser.rows,
                        TRANSACTION_COLUMNS,
                        title="\nTransactions (last 30 days)",
                        default_index=browser.selected_index(),
                        session=session,
                    )
                    if txn_id is None:
                        break
                    browser.select_transaction(txn_id)

                    code = select_spending_category(session=session)
                    if code is None:
                        continue
                    try:
                        set_category(client, browser, txn_id, code)
                    except StarlingSpacesError as e:
                        # The previous list stays on screen.
                        _fail(str(e))


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Browse Starling spaces and category feeds. Reads STARLING_ACCESS_TOKEN "
        "(or a token file) after loading a local .env."
    ),
)


def _settings(ctx: typer.Context) -> Settings:
    obj = ctx.obj
    return obj if isinstance(obj, Settings) else Settings.from_env()


@app.command("spaces")
def spaces_cmd(
    ctx: typer.Context,
    include_accounts: bool | None = typer.Option(
        None,
        "--include-accounts/--no-include-accounts",
        help="Also list every account as a pseudo-space (env STARLING_INCLUDE_ACCOUNTS).",
    ),
    concurrency: int | None = typer.Option(
        None, help="Parallel balance lookups (env STARLING_BALANCE_CONCURRENCY, max 8)."
    ),
) -> None:
    """List savings goals, spending spaces and (optionally) accounts."""

    raise typer.Exit(
        cmd_spaces(_settings(ctx), include_accounts=include_accounts, concurrency=concurrency)
    )


@app.command("transactions")
def transactions_cmd(
    ctx: typer.Context,
    account: str = typer.Option(..., help="Account uid."),
    category: str = typer.Option(..., help="Category uid (space, goal or default category)."),
) -> None:
    """Show the last 30 days of a category-scoped feed."""

    raise typer.Exit(cmd_transactions(_settings(ctx), account_id=account, category_id=category))


@app.command("set-category")
def set_category_cmd(
    ctx: typer.Context,
    account: str = typer.Option(..., help="Account uid."),
    category: str = typer.Option(..., help="Category uid the transaction is listed under."),
    txn: str = typer.Option(..., help="Feed item uid."),
    to: str = typer.Option(..., "--to", help="New spending category code, e.g. EATING_OUT."),
) -> None:
    """Change one transaction's spending category and show the refreshed feed."""

    raise typer.Exit(
        cmd_set_category(
            _settings(ctx),
            account_id=account,
            category_id=category,
            txn_id=txn,
            new_category=to,
        )
    )


@app.command("categories")
def categories_cmd() -> None:
    """List the spending category codes accepted by set-category."""

    raise typer.Exit(cmd_categories())


@app.command("insights")
def insights_cmd(
    ctx: typer.Context,
    year: int = typer.Option(..., help="Calendar year, e.g. 2026."),
    month: str = typer.Option(..., help="Month number or name, e.g. 3 or MARCH."),
    account: str | None = typer.Option(None, help="Account uid (defaults to the primary)."),
) -> None:
    """Show a month's spending broken down by spending category."""

    raise typer.Exit(cmd_insights(_settings(ctx), account_id=account, year=year, month=month))


@app.command("browse")
def browse_cmd(
    ctx: typer.Context,
    include_accounts: bool | None = typer.Option(
        None, "--include-accounts/--no-include-accounts", help="Show accounts as spaces."
    ),
    concurrency: int | None = typer.Option(None, help="Parallel balance lookups (max 8)."),
) -> None:
    """Interactively browse spaces and recategorize transactions."""

    raise typer.Exit(
        cmd_browse(_settings(ctx), include_accounts=include_accounts, concurrency=concurrency)
    )


@app.callback()
def _root(
    ctx: typer.Context,
    log_level: str | None = typer.Option(
        None, help="Log level (env STARLING_SPACES_LOG_LEVEL, default INFO)."
    ),
    api_url: str | None = typer.Option(None, help="Override STARLING_API_URL."),
) -> None:
    """Load ``.env`` from the working directory, configure logging and settings."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level)

    settings = Settings.from_env()
    if api_url:
        settings = Settings(
            api_url=api_url.rstrip("/"),
            timeout=settings.timeout,
            include_accounts=settings.include_accounts,
            balance_concurrency=settings.balance_concurrency,
        )
    ctx.obj = settings
    logger.debug("using API %s", settings.api_url)


if __name__ == "__main__":  # pragma: no cover
    app()

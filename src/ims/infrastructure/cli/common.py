"""Formatting helpers shared by the CLI command modules."""

from __future__ import annotations

import click

from ims.application.dto import CursorPagination, OffsetPagination, PageDTO
from ims.application.pagination import DEFAULT_LIMIT, MAX_LIMIT


def pagination_options(func):
    """Attach --cursor/--page/--limit to a listing command."""
    func = click.option(
        "--limit",
        default=DEFAULT_LIMIT,
        show_default=True,
        type=click.IntRange(1, MAX_LIMIT),
        help="Rows per page.",
    )(func)
    func = click.option(
        "--page", type=click.IntRange(min=1), default=None, help="Page number (offset paging)."
    )(func)
    func = click.option(
        "--cursor",
        type=click.IntRange(min=0),
        default=None,
        help="Last seen ID (cursor paging, 0 to start). Wins over --page.",
    )(func)
    return func


def echo_pagination(page: PageDTO) -> None:
    info = page.pagination
    if isinstance(info, CursorPagination):
        if info.has_more:
            click.echo(f"More results: --cursor {info.next_cursor}")
        else:
            click.echo("No more results.")
    elif isinstance(info, OffsetPagination):
        click.echo(
            f"Page {info.page}/{max(info.total_pages, 1)}  "
            f"({info.total} total, limit {info.limit})"
        )

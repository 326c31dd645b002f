# main.py — 2026-10-19
import functools
import logging
from types import SimpleNamespace
from urllib.parse import urlparse

import click
import requests

from config import PERMISSIVE, RESTRICTIVE, VARIANTS, SiteConfig
from filters import Header, UriPartFilter
from logging_config import setup_logging
from models import Request
from parser import ParseError
from source import OceanWP
from utils import format_entries


def _site_options(fn):
    fn = click.option("--variant", type=click.Choice(sorted(VARIANTS)), default="megamenu",
                      show_default=True, help="Site flavour preset.")(fn)
    fn = click.option("--classifier", type=click.Choice([PERMISSIVE, RESTRICTIVE]),
                      default=None, help="Override the path classification policy.")(fn)
    fn = click.option("--no-tags", is_flag=True, help="Hide tag filters.")(fn)
    fn = click.option("--no-intercept", is_flag=True,
                      help="Only discover categories with the explicit request.")(fn)
    return fn


def _transport_errors(fn):
    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except requests.RequestException as exc:
            raise click.ClickException(f"request failed: {exc}")
    return wrapper


def _source(ctx: click.Context, site: str, **opts) -> OceanWP:
    args = SimpleNamespace(site=site, **opts)
    try:
        config = SiteConfig.from_args(args)
    except ValueError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param_hint="SITE")
    return OceanWP(config)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
def cli(verbose: bool) -> None:
    """Browse and search OceanWP-themed sites from the terminal."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING)


@cli.command()
@click.argument("site")
@click.option("--page", default=1, show_default=True, type=click.IntRange(min=1))
@_site_options
@click.pass_context
@_transport_errors
def popular(ctx, site: str, page: int, **opts) -> None:
    """List the front page of SITE."""
    result = _source(ctx, site, **opts).list_popular(page)
    click.echo(format_entries(result.entries, result.has_next_page))


@cli.command()
@click.argument("site")
@click.option("--page", default=1, show_default=True, type=click.IntRange(min=1))
@_site_options
@click.pass_context
@_transport_errors
def latest(ctx, site: str, page: int, **opts) -> None:
    """List the newest posts of SITE."""
    result = _source(ctx, site, **opts).list_latest(page)
    click.echo(format_entries(result.entries, result.has_next_page))


@cli.command()
@click.argument("site")
@click.argument("query", nargs=-1)
@click.option("-k", "--key", "keys", multiple=True, help="Category/tag key, repeatable.")
@click.option("--page", default=1, show_default=True, type=click.IntRange(min=1))
@click.option("--strict", is_flag=True, help="Fail instead of guessing when no path answers.")
@click.option("--dry-run", is_flag=True, help="Print the resolved URL only.")
@_site_options
@click.pass_context
@_transport_errors
def search(ctx, site: str, query, keys, page: int, strict: bool, dry_run: bool, **opts) -> None:
    """Search SITE by text, or browse it by category/tag keys."""
    src = _source(ctx, site, **opts)
    text = " ".join(query)
    if dry_run:
        click.echo(src.search_request(page, text, list(keys), strict=strict).url)
        return
    result = src.search(page, text, list(keys), strict=strict)
    click.echo(format_entries(result.entries, result.has_next_page))


@cli.command()
@click.argument("site")
@_site_options
@click.pass_context
@_transport_errors
def filters(ctx, site: str, **opts) -> None:
    """Show the category and tag filters SITE offers."""
    for f in _source(ctx, site, **opts).get_filter_options():
        if isinstance(f, Header):
            click.echo(click.style(f"# {f.name}", fg="yellow"))
        elif isinstance(f, UriPartFilter):
            click.echo(click.style(f"{f.name}:", fg="green"))
            for v in f.values:
                click.echo(f"  {v.label:<30} {v.key}")


def _site_root(url: str) -> str:
    parts = urlparse(url)
    return f"{parts.scheme}://{parts.netloc}" if parts.netloc else url


def _document(src: OceanWP, url: str):
    return src.fetcher.fetch_document(Request(url, headers=dict(src.headers)))


@cli.command()
@click.argument("url")
@_site_options
@click.pass_context
@_transport_errors
def details(ctx, url: str, **opts) -> None:
    """Show title, genres and description of the post at URL."""
    src = _source(ctx, _site_root(url), **opts)
    try:
        info = src.fetch_details(_document(src, url))
    except ParseError as exc:
        raise click.ClickException(str(exc))
    click.echo(click.style(info.title, bold=True))
    for label, value in (("Author", info.author), ("Genre", info.genre),
                         ("Cover", info.thumbnail_url), ("Status", info.status)):
        if value:
            click.echo(f"{label}: {value}")
    if info.description:
        click.echo("\n" + info.description)


@cli.command()
@click.argument("url")
@_site_options
@click.pass_context
@_transport_errors
def chapters(ctx, url: str, **opts) -> None:
    """List chapters of the post at URL."""
    src = _source(ctx, _site_root(url), **opts)
    resp = src.fetcher.fetch(Request(url, headers=dict(src.headers)))
    try:
        found = src.fetch_chapter_list(resp)
    except ParseError as exc:
        raise click.ClickException(str(exc))
    for ch in found:
        click.echo(f"{ch.name}  {ch.url}  {ch.date_upload}")


@cli.command()
@click.argument("url")
@_site_options
@click.pass_context
@_transport_errors
def pages(ctx, url: str, **opts) -> None:
    """List image URLs of the post at URL."""
    src = _source(ctx, _site_root(url), **opts)
    for p in src.fetch_page_list(_document(src, url)):
        click.echo(f"{p.index:>3}  {p.image_url}")


if __name__ == "__main__":
    cli()

"""Main Typer application for Folio."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from folio.cli.errorhandler import handle_cli_errors
from folio.config import (
    FolioConfig,
    config_path_for,
    find_site_root,
    load_config,
    parse_date_arg,
    save_config,
    validate_site_structure,
)
from folio.corpus import Corpus, create_draft, demote_post, promote_draft
from folio.lint import Severity, rule_catalog, run_lint
from folio.logging_setup import configure_logging
from folio.rendering import render_tags_page, render_toc, write_tags_page

app = typer.Typer(
    name="folio",
    help="Editorial tooling for a Markdown article corpus: drafts, posts, tags and lint.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()
logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CliState:
    site: Path | None
    debug: bool

    def site_root(self) -> Path:
        if self.site is not None:
            return self.site
        return find_site_root(Path.cwd()) or Path.cwd()


def _state(ctx: typer.Context) -> CliState:
    if ctx.obj is None:
        ctx.obj = CliState(site=None, debug=False)
    return ctx.obj


def _load(state: CliState) -> tuple[Path, FolioConfig]:
    site_root = state.site_root().resolve()
    config = load_config(site_root)
    validate_site_structure(site_root, config)
    return site_root, config


@app.callback()
def main(
    ctx: typer.Context,
    site: Annotated[
        Path | None,
        typer.Option("--site", "-s", help="Site root (defaults to the nearest directory with .folio/)"),
    ] = None,
    debug: Annotated[bool, typer.Option("--debug", help="Show full tracebacks")] = False,
    log_level: Annotated[str | None, typer.Option("--log-level", help="Override FOLIO_LOG_LEVEL")] = None,
) -> None:
    """Initialize logging and shared options."""
    configure_logging("DEBUG" if debug else log_level)
    ctx.obj = CliState(site=site.expanduser().resolve() if site else None, debug=debug)


@app.command()
def init(
    ctx: typer.Context,
    directory: Annotated[Path | None, typer.Argument(help="Site root to initialize")] = None,
) -> None:
    """Create the posts and drafts folders and a default .folio/config.yml."""
    state = _state(ctx)
    with handle_cli_errors(debug=state.debug):
        site_root = (directory or state.site or Path.cwd()).expanduser().resolve()
        config_path = config_path_for(site_root)
        if config_path.exists():
            config = load_config(site_root)
            console.print(f"[yellow]Already initialized:[/yellow] {escape(str(config_path))}")
        else:
            config = FolioConfig()
            save_config(config, site_root)
            console.print(f"[green]Wrote[/green] {escape(str(config_path))}")

        for folder in (config.paths.posts, config.paths.drafts):
            (site_root / folder).mkdir(parents=True, exist_ok=True)
        logger.debug("Initialized site at %s", site_root)


@app.command()
def new(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(help="Title of the new post")],
    tag: Annotated[list[str] | None, typer.Option("--tag", "-t", help="Tag (repeatable)")] = None,
    toc: Annotated[bool, typer.Option("--toc", help="Request a table of contents")] = False,
    slug: Annotated[str | None, typer.Option("--slug", help="Slug (defaults to the slugified title)")] = None,
) -> None:
    """Create a new draft."""
    state = _state(ctx)
    with handle_cli_errors(debug=state.debug):
        site_root, config = _load(state)
        draft = create_draft(site_root, config, title, tags=tag or [], toc=toc, slug=slug)
        console.print(f"[green]Created draft[/green] {escape(str(draft.path.relative_to(site_root)))}")


@app.command()
def promote(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Slug of the draft to publish")],
    on: Annotated[str | None, typer.Option("--date", help="Publication date (YYYY-MM-DD), default today")] = None,
) -> None:
    """Move a draft into the posts folder under a dated filename."""
    state = _state(ctx)
    with handle_cli_errors(debug=state.debug):
        site_root, config = _load(state)
        published = parse_date_arg(on) if on else None
        post = promote_draft(site_root, config, slug, on=published)
        console.print(f"[green]Published[/green] {escape(str(post.path.relative_to(site_root)))}")


@app.command()
def demote(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Slug of the post to move back to drafts")],
) -> None:
    """Move a post back to the drafts folder."""
    state = _state(ctx)
    with handle_cli_errors(debug=state.debug):
        site_root, config = _load(state)
        draft = demote_post(site_root, config, slug)
        console.print(f"[yellow]Moved to drafts[/yellow] {escape(str(draft.path.relative_to(site_root)))}")


@app.command("list")
def list_posts(
    ctx: typer.Context,
    drafts: Annotated[bool, typer.Option("--drafts", help="List drafts instead of posts")] = False,
    tag: Annotated[str | None, typer.Option("--tag", "-t", help="Only posts with this tag")] = None,
    year: Annotated[int | None, typer.Option("--year", help="Only posts from this year")] = None,
) -> None:
    """List posts (newest first) or drafts."""
    state = _state(ctx)
    with handle_cli_errors(debug=state.debug):
        site_root, config = _load(state)
        corpus = Corpus.load(site_root, config)

        if drafts:
            table = Table(title=f"Drafts ({len(corpus.drafts)})")
            table.add_column("Slug", style="cyan")
            table.add_column("Title")
            table.add_column("Tags", style="magenta")
            for draft in corpus.drafts:
                table.add_row(draft.slug, escape(draft.title), escape(", ".join(draft.tags)))
        else:
            posts = corpus.filter(tag=tag, year=year)
            table = Table(title=f"Posts ({len(posts)})")
            table.add_column("Date", style="green", no_wrap=True)
            table.add_column("Slug", style="cyan")
            table.add_column("Title")
            table.add_column("Tags", style="magenta")
            for post in posts:
                title = escape(post.title)
                if post.metadata.is_redirect:
                    title += " [dim](moved)[/dim]"
                table.add_row(post.date.isoformat(), post.slug, title, escape(", ".join(post.tags)))

        console.print(table)
        if corpus.problems:
            console.print(f"[yellow]{len(corpus.problems)} file(s) could not be loaded; run 'folio lint'.[/yellow]")


@app.command()
def tags(
    ctx: typer.Context,
    write: Annotated[bool, typer.Option("--write", help="Write the tags page into the site")] = False,
    show_page: Annotated[bool, typer.Option("--page", help="Print the rendered tags page")] = False,
) -> None:
    """Show tag usage, or write the tags index page."""
    state = _state(ctx)
    with handle_cli_errors(debug=state.debug):
        site_root, config = _load(state)
        corpus = Corpus.load(site_root, config)

        if write:
            path = write_tags_page(corpus)
            console.print(f"[green]Wrote[/green] {escape(str(path.relative_to(site_root.resolve())))}")
            return
        if show_page:
            typer.echo(render_tags_page(corpus), nl=False)
            return

        table = Table(title="Tags")
        table.add_column("Tag", style="magenta")
        table.add_column("Posts", justify="right")
        for name, posts in corpus.tag_index().items():
            table.add_row(escape(name), str(len(posts)))
        console.print(table)


@app.command()
def toc(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Slug of the post")],
    max_level: Annotated[int, typer.Option("--max-level", min=1, max=6, help="Deepest heading level")] = 3,
) -> None:
    """Print a Markdown table of contents for a post."""
    state = _state(ctx)
    with handle_cli_errors(debug=state.debug):
        site_root, config = _load(state)
        corpus = Corpus.load(site_root, config)
        post = corpus.get_post(slug)
        rendered = render_toc(post, max_level=max_level)
        if not rendered:
            console.print(f"[yellow]{escape(post.slug)} has no headings.[/yellow]")
            return
        typer.echo(rendered, nl=False)


@app.command()
def lint(
    ctx: typer.Context,
    strict: Annotated[bool, typer.Option("--strict", help="Fail on warnings too")] = False,
) -> None:
    """Check every post and draft for editorial problems."""
    state = _state(ctx)
    with handle_cli_errors(debug=state.debug):
        site_root, config = _load(state)
        corpus = Corpus.load(site_root, config)
        report = run_lint(corpus)

        for finding in report.findings:
            colour = "red" if finding.severity is Severity.ERROR else "yellow"
            console.print(
                f"{escape(finding.location(site_root))} "
                f"[{colour}]{finding.code}[/{colour}] {escape(finding.message)}"
            )

        summary = (
            f"{report.files_checked} file(s) checked: "
            f"{len(report.errors)} error(s), {len(report.warnings)} warning(s)"
        )
        failed = report.has_errors or (strict and bool(report.findings))
        console.print(f"[bold {'red' if failed else 'green'}]{summary}[/]")
        if failed:
            raise typer.Exit(1)


@app.command()
def rules() -> None:
    """List the lint rules."""
    table = Table(title="Lint rules")
    table.add_column("Code", style="cyan")
    table.add_column("Severity")
    table.add_column("Checks")
    for code, severity, summary in rule_catalog():
        table.add_row(code, severity.value, summary)
    console.print(table)

"""CLI entry point for the novelshelf reading and publishing tool.

Usage:
  novelshelf home                 latest novels and chapters
  novelshelf show NOVEL_ID        novel detail with its chapter list
  novelshelf read NOVEL_ID CH_ID  read a chapter
  novelshelf create-novel ...     publish a new novel
  novelshelf --help               list every command
"""

import asyncio
import logging
import sys

import click
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from cli.theme import (
    get_console,
    app_header,
    command_panel,
    success_panel,
    genre_labels,
    novel_summary_panel,
    novel_table,
    chapter_table,
)
from config.exceptions import DataSourceError, DocumentExtractionError, ValidationError
from config.logging_config import setup_logging
from config.settings import Settings
from models.chapter import ChapterFormData
from models.enums import ChapterSort
from models.novel import NovelFormData
from repositories.selector import DataSource, create_data_source
from services.importer import ChapterImporter
from services.views import latest_novels, load_home, load_novel_detail, load_reader
from tools.docx_parser import UploadedFile
from tools.text_utils import count_words, split_into_paragraphs, time_ago

console = get_console()
logger = logging.getLogger(__name__)


class ConsoleNotifier:
    """Prints repository notifications to the terminal."""

    def success(self, message: str) -> None:
        console.print(f"[success]✓ {escape(message)}[/]")

    def error(self, message: str) -> None:
        console.print(f"[error]✗ {escape(message)}[/]")


def _init_logging(verbose: bool):
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    settings = Settings()
    setup_logging(level=level, log_dir=settings.log_dir, console_enabled=verbose)


def _run(action):
    """Run ``action(source)`` against a fresh data source, then close it.

    Data source failures have already been reported by the repositories;
    they end the command with exit code 1.
    """
    async def _main():
        source = create_data_source(Settings(), notifier=ConsoleNotifier())
        try:
            return await action(source)
        finally:
            await source.aclose()

    try:
        return asyncio.run(_main())
    except DataSourceError as e:
        logger.debug("Command aborted by data source error", exc_info=True)
        console.print(f"[error]Data source error: {escape(str(e))}[/]")
        sys.exit(1)


def _fail(message: str):
    console.print(f"[error]{escape(message)}[/]")
    sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """novelshelf: browse, search and publish serialized fiction.

    \b
    Runs against the remote data service when SUPABASE_URL and
    SUPABASE_ANON_KEY are set, otherwise against built-in sample data.
    """
    _init_logging(verbose)


# ---------------------------------------------------------------------------
# Reader commands
# ---------------------------------------------------------------------------

@cli.command()
@click.option("--page", "-p", default=1, type=int, help="Page of latest chapters")
def home(page):
    """Show the latest novels and the latest chapter of each novel."""
    settings = Settings()
    view = _run(lambda src: load_home(src.novels, src.chapters, page=page, settings=settings))

    console.print(app_header())
    console.print()
    if not view.latest_novels:
        console.print("[warning]No novels yet. Use [info]novelshelf create-novel[/] to publish one.[/]")
        return
    console.print(novel_table(view.latest_novels, title="Latest novels"))
    console.print()

    latest = view.latest_chapters
    table = Table(title="Latest chapters", border_style="dim")
    table.add_column("Novel", style="bold")
    table.add_column("#", style="chapter.num", justify="right")
    table.add_column("Chapter")
    table.add_column("Updated", justify="right", style="muted")
    for item in latest.items:
        table.add_row(item.novel.title, str(item.chapter.order), item.chapter.title, time_ago(item.chapter.updated_at))
    console.print(table)
    if latest.total_pages > 1:
        console.print(f"[muted]Page {latest.page} of {latest.total_pages}[/]")


@cli.command()
def novels():
    """List every novel, most recently updated first."""
    items = _run(lambda src: src.novels.list_all())
    if not items:
        console.print("[warning]No novels yet.[/]")
        return
    console.print(novel_table(latest_novels(items, limit=len(items))))


@cli.command()
def genres():
    """List the available genres."""
    items = _run(lambda src: src.novels.list_genres())
    table = Table(title="Genres", border_style="dim")
    table.add_column("ID", style="muted")
    table.add_column("Name", style="genre")
    for g in items:
        table.add_row(g.id, g.name)
    console.print(table)


@cli.command()
@click.argument("query", required=False, default="")
@click.option("--genre", "-g", "genre_ids", multiple=True, help="Genre ID the novel must have (repeatable)")
def search(query, genre_ids):
    """Search novels by title/description text and genres.

    \b
    Every --genre must be present on a result:
      novelshelf search crystal
      novelshelf search -g 1 -g 6
    """
    results = _run(lambda src: src.novels.search(query, list(genre_ids)))
    if not results:
        console.print("[warning]No novels match your search.[/]")
        return
    console.print(novel_table(results, title=f"Search results ({len(results)})"))


@cli.command()
@click.argument("novel_id")
@click.option("--sort", "-s", type=click.Choice([s.value for s in ChapterSort]), default=ChapterSort.OLDEST.value)
@click.option("--page", "-p", default=1, type=int, help="Page of the chapter list")
def show(novel_id, sort, page):
    """Show a novel and its chapter list."""
    settings = Settings()
    detail = _run(lambda src: load_novel_detail(
        src.novels, src.chapters, novel_id,
        sort=ChapterSort(sort), page=page, per_page=settings.detail_chapters_page_size,
    ))
    if detail is None:
        _fail(f"Novel {novel_id} not found")

    console.print(novel_summary_panel(detail.novel, detail.chapters.total_items))
    console.print()
    if not detail.chapters.items:
        console.print("[muted]No chapters yet.[/]")
        return
    console.print(chapter_table(detail.chapters.items))
    if detail.chapters.total_pages > 1:
        console.print(f"[muted]Page {detail.chapters.page} of {detail.chapters.total_pages}[/]")


@cli.command()
@click.argument("novel_id")
@click.argument("chapter_id")
def read(novel_id, chapter_id):
    """Read one chapter of a novel."""
    view = _run(lambda src: load_reader(src.novels, src.chapters, novel_id, chapter_id))
    if view is None:
        _fail(f"Chapter {chapter_id} of novel {novel_id} not found")

    ch = view.chapter
    console.print(Panel(
        f"  [stat.label]Novel:[/] {view.novel.title}\n"
        f"  [stat.label]Chapter:[/] [chapter.num]{ch.order}[/] of {view.chapter_count}  "
        f"[stat.label]Words:[/] [stat.value]{count_words(ch.content)}[/]",
        title=f"[bold]{ch.title}[/]",
        border_style="dim",
        padding=(0, 2),
    ))
    console.print()
    for paragraph in split_into_paragraphs(ch.content):
        console.print(paragraph, markup=False)
        console.print()

    if view.previous:
        console.print(f"[muted]← Previous:[/] {view.previous.title} [muted]({view.previous.id})[/]")
    if view.next:
        console.print(f"[muted]→ Next:[/] {view.next.title} [muted]({view.next.id})[/]")


# ---------------------------------------------------------------------------
# Author commands: novels
# ---------------------------------------------------------------------------

@cli.command(name="create-novel")
@click.option("--title", "-t", required=True, help="Novel title")
@click.option("--description", "-d", required=True, help="Short description")
@click.option("--image-url", "-i", default="", help="Cover image URL")
@click.option("--genre", "-g", "genre_names", multiple=True, help="Genre name (repeatable, created if new)")
def create_novel(title, description, image_url, genre_names):
    """Publish a new novel.

    Example:
      novelshelf create-novel -t "Ash Road" -d "A courier crosses a burnt continent." -g Adventure
    """
    form = NovelFormData(title=title, description=description, image_url=image_url, genres=list(genre_names))
    try:
        form.validate()
    except ValidationError as e:
        _fail(str(e))

    console.print(command_panel("New novel", {
        "Title": title,
        "Genres": ", ".join(genre_names) or "-",
    }))
    novel = _run(lambda src: src.novels.create(form))
    console.print(success_panel("Novel created", f"ID: {novel.id}\nGenres: {genre_labels(novel.genres)}"))


@cli.command(name="edit-novel")
@click.argument("novel_id")
@click.option("--title", "-t", default=None, help="New title")
@click.option("--description", "-d", default=None, help="New description")
@click.option("--image-url", "-i", default=None, help="New cover image URL")
@click.option("--genre", "-g", "genre_names", multiple=True, help="Replace genres (repeatable)")
def edit_novel(novel_id, title, description, image_url, genre_names):
    """Edit a novel; options not given keep their current values."""

    async def _edit(src: DataSource):
        current = await src.novels.get(novel_id)
        if current is None:
            return None, None
        form = NovelFormData(
            title=current.title if title is None else title,
            description=current.description if description is None else description,
            image_url=current.image_url if image_url is None else image_url,
            genres=list(genre_names) if genre_names else [g.name for g in current.genres],
        )
        try:
            form.validate()
        except ValidationError as e:
            return None, e
        return await src.novels.update(novel_id, form), None

    novel, error = _run(_edit)
    if error is not None:
        _fail(str(error))
    if novel is None:
        _fail(f"Novel {novel_id} not found")
    console.print(success_panel("Novel updated", f"{novel.title} ({novel.id})\nGenres: {genre_labels(novel.genres)}"))


@cli.command(name="delete-novel")
@click.argument("novel_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
def delete_novel(novel_id, yes):
    """Delete a novel and all of its chapters."""
    if not yes:
        click.confirm(f"Delete novel {novel_id} and all its chapters?", abort=True)
    if not _run(lambda src: src.novels.delete(novel_id)):
        sys.exit(1)


# ---------------------------------------------------------------------------
# Author commands: chapters
# ---------------------------------------------------------------------------

@cli.command(name="add-chapter")
@click.argument("novel_id")
@click.option("--title", "-t", default=None, help="Chapter title (defaults to the file name with --file)")
@click.option("--content", "-c", default=None, help="Chapter text")
@click.option("--file", "-f", "file_path", default=None, type=click.Path(exists=True, dir_okay=False),
              help="Read the chapter text from a .docx file")
def add_chapter(novel_id, title, content, file_path):
    """Append a chapter to a novel, typed in or imported from a .docx file."""
    if file_path is None:
        form = ChapterFormData(title=title or "", content=content or "")
        try:
            form.validate()
        except ValidationError as e:
            _fail(str(e))

    async def _add(src: DataSource):
        if await src.novels.get(novel_id) is None:
            return None
        if file_path is not None:
            importer = ChapterImporter(src.chapters)
            return await importer.import_document(novel_id, UploadedFile.from_path(file_path), title=title)
        return await src.chapters.create(novel_id, form)

    try:
        chapter = _run(_add)
    except DocumentExtractionError as e:
        _fail(str(e))
    if chapter is None:
        _fail(f"Novel {novel_id} not found")
    console.print(success_panel("Chapter added", f"#{chapter.order} {chapter.title}\nID: {chapter.id}"))


@cli.command(name="edit-chapter")
@click.argument("chapter_id")
@click.option("--title", "-t", default=None, help="New title")
@click.option("--content", "-c", default=None, help="New text")
def edit_chapter(chapter_id, title, content):
    """Edit a chapter's title or text; its position is unchanged."""

    async def _edit(src: DataSource):
        current = await src.chapters.get(chapter_id)
        if current is None:
            return None, None
        form = ChapterFormData(
            title=current.title if title is None else title,
            content=current.content if content is None else content,
        )
        try:
            form.validate()
        except ValidationError as e:
            return None, e
        return await src.chapters.update(chapter_id, form), None

    chapter, error = _run(_edit)
    if error is not None:
        _fail(str(error))
    if chapter is None:
        _fail(f"Chapter {chapter_id} not found")
    console.print(success_panel("Chapter updated", f"#{chapter.order} {chapter.title}"))


@cli.command(name="delete-chapter")
@click.argument("chapter_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
def delete_chapter(chapter_id, yes):
    """Delete a chapter; the remaining chapters are renumbered."""
    if not yes:
        click.confirm(f"Delete chapter {chapter_id}?", abort=True)
    if not _run(lambda src: src.chapters.delete(chapter_id)):
        sys.exit(1)


@cli.command()
@click.argument("novel_id")
@click.argument("chapter_ids", nargs=-1, required=True)
def reorder(novel_id, chapter_ids):
    """Set chapter positions to the order the IDs are given in."""
    if not _run(lambda src: src.chapters.reorder(novel_id, list(chapter_ids))):
        sys.exit(1)


@cli.command(name="import-chapters")
@click.argument("novel_id")
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
def import_chapters(novel_id, files):
    """Create one chapter per .docx file, in the order given.

    Files that cannot be read are skipped and reported.
    """
    uploads = [UploadedFile.from_path(f) for f in files]

    async def _import(src: DataSource):
        if await src.novels.get(novel_id) is None:
            return None
        return await ChapterImporter(src.chapters).import_batch(novel_id, uploads)

    report = _run(_import)
    if report is None:
        _fail(f"Novel {novel_id} not found")

    table = Table(title="Import results", show_header=True, border_style="dim")
    table.add_column("File")
    table.add_column("Result")
    for item in report.created:
        table.add_row(
            escape(item.file_name),
            f"[success]chapter #{item.chapter.order}[/] {escape(item.chapter.title)}",
        )
    for failure in report.failed:
        table.add_row(escape(failure.file_name), f"[error]{escape(failure.error)}[/]")
    console.print(table)
    console.print(f"{len(report.created)} created, {len(report.failed)} failed")

    if not report.created:
        sys.exit(1)


if __name__ == "__main__":
    cli()

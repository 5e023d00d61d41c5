"""Unified Rich theme and reusable UI helper functions for the CLI."""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.theme import Theme

from tools.text_utils import excerpt, time_ago

NOVEL_THEME = Theme({
    "app.title": "bold",
    "success": "green",
    "warning": "yellow",
    "error": "red",
    "info": "blue",
    "muted": "dim",
    "accent": "cyan",
    "genre": "bold magenta",
    "stat.label": "dim",
    "stat.value": "bold",
    "chapter.num": "blue",
})


def get_console() -> Console:
    """Return a Console instance with the novel theme applied."""
    return Console(theme=NOVEL_THEME)


def app_header(title: str = "novelshelf") -> Rule:
    """Return a Rule element for the application header banner."""
    return Rule(title=f"[bold]{title}[/]", style="dim")


def command_panel(title: str, fields: dict[str, str]) -> Panel:
    """Return a Panel displaying command parameters.

    Args:
        title: Panel title (e.g. "New novel").
        fields: Ordered dict of label -> value pairs.
    """
    lines = []
    for label, value in fields.items():
        lines.append(f"  [stat.label]{label}:[/] [stat.value]{value}[/]")
    body = "\n".join(lines)
    return Panel(body, title=f"[bold]{title}[/]", box=box.ROUNDED, border_style="dim", padding=(0, 2))


def success_panel(title: str, body: str) -> Panel:
    """Return a green-bordered Panel for success results."""
    return Panel(body, title=f"[success]{title}[/]", box=box.ROUNDED, border_style="green", padding=(0, 2))


def genre_labels(genres: list) -> str:
    if not genres:
        return "[muted]-[/]"
    return ", ".join(f"[genre]{g.name}[/]" for g in genres)


def novel_summary_panel(novel, chapter_count: int) -> Panel:
    """Return a Panel with novel summary stats.

    Args:
        novel: Novel with .id, .title, .description, .genres, .updated_at.
        chapter_count: Number of chapters the novel has.
    """
    body = (
        f"  [stat.label]Genres:[/] {genre_labels(novel.genres)}  "
        f"[muted]|[/]  [stat.label]Chapters:[/] [stat.value]{chapter_count}[/]  "
        f"[muted]|[/]  [stat.label]Updated:[/] {time_ago(novel.updated_at)}\n"
        f"  [stat.label]Description:[/] {excerpt(novel.description, 200)}"
    )
    return Panel(
        body,
        title=f"[bold]{novel.title}[/] [muted](ID: {novel.id})[/]",
        box=box.ROUNDED,
        border_style="dim",
        padding=(0, 2),
    )


def novel_table(novels: list, title: str = "Novels") -> Table:
    """Build a Rich Table listing novels."""
    table = Table(title=title, show_lines=True, border_style="dim")
    table.add_column("ID", style="chapter.num")
    table.add_column("Title", style="bold")
    table.add_column("Genres")
    table.add_column("Description")
    table.add_column("Updated", justify="right", style="muted")

    for n in novels:
        table.add_row(n.id, n.title, genre_labels(n.genres), excerpt(n.description, 60), time_ago(n.updated_at))
    return table


def chapter_table(chapters: list, title: str = "Chapters") -> Table:
    """Build a Rich Table listing chapters with their order numbers."""
    table = Table(title=title, border_style="dim")
    table.add_column("#", style="chapter.num", justify="right")
    table.add_column("ID", style="muted")
    table.add_column("Title")
    table.add_column("Updated", justify="right", style="muted")

    for ch in chapters:
        table.add_row(str(ch.order), ch.id, ch.title or "-", time_ago(ch.updated_at))
    return table

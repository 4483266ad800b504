"""Terminal rendering of news articles

Turns already-validated articles into a text table for curl clients, with
ANSI colors unless the client asked for plain text.

Example:
    >>> print(format_articles([{'title': 'Hello', 'url': 'https://getnews.tech/s/abc'}], color=False))
    ┌───┬──────────────────────────────┬───────────┐
    │ # │ Article                      │ Published │
    ...
"""

from datetime import UTC, datetime
from io import StringIO

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from getnews.types import Article


DEFAULT_WIDTH = 100
NO_ARTICLES = 'No articles found for this query.\n'


def _published(article: Article) -> str:
    raw = article.get('publishedAt') or ''
    try:
        published = datetime.fromisoformat(raw)
    except ValueError:
        return raw
    # naive timestamps are already UTC
    if published.tzinfo is not None:
        published = published.astimezone(UTC)
    return published.strftime('%b %d, %Y\n%H:%M UTC')


def _article_cell(article: Article) -> Text:
    text = Text()
    text.append(article.get('title') or 'Untitled', style='bold cyan')
    source = (article.get('source') or {}).get('name')
    if source:
        text.append(f' ({source})', style='magenta')
    if article.get('description'):
        text.append(f"\n{article['description']}")
    if article.get('url'):
        text.append(f"\n{article['url']}", style='underline blue')
    return text


def format_articles(articles: list[Article], *, color: bool = True, reverse: bool = False, width: int = DEFAULT_WIDTH) -> str:
    """Render articles as a terminal table

    Args:
        articles (list[Article]): articles as returned by the news API
        color (bool): emit ANSI color codes
        reverse (bool): list the articles in reverse order
        width (int): table width in columns

    Returns:
        str: the rendered table, newline terminated
    """
    if not articles:
        return NO_ARTICLES
    if reverse:
        articles = list(reversed(articles))

    table = Table(box=box.SQUARE, show_lines=True, header_style='bold red', expand=True)
    table.add_column('#', justify='right', style='yellow', no_wrap=True)
    table.add_column('Article', ratio=1)
    table.add_column('Published', style='green', no_wrap=True)
    for index, article in enumerate(articles, start=1):
        table.add_row(str(index), _article_cell(article), _published(article))

    console = Console(
        file=StringIO(),
        width=width,
        force_terminal=color,
        color_system='standard' if color else None,
        no_color=not color,
        highlight=False,
    )
    console.print(table)
    return console.file.getvalue()

"""Unit tests for format_articles()

Test coverage includes:

1. Table content
   - Every article's title, source and URL is rendered.
   - Articles are numbered in display order.

2. Options
   - reverse lists the articles last to first.
   - color toggles ANSI escape codes.

3. Edge cases
   - No articles renders a short message.
   - Missing fields and unparsable dates don't break rendering.
   - Offset timestamps are rendered in UTC.
"""

from getnews.formatter import NO_ARTICLES, format_articles


ARTICLES = [
    {
        'title': 'First headline',
        'description': 'Something happened.',
        'url': 'https://getnews.tech/s/AAAAAAAAAAAAAAAA',
        'source': {'name': 'Daily'},
        'publishedAt': '2026-10-19T08:30:00Z',
    },
    {
        'title': 'Second headline',
        'url': 'https://getnews.tech/s/BBBBBBBBBBBBBBBB',
        'source': {'name': 'Weekly'},
        'publishedAt': '2026-10-18T21:00:00Z',
    },
]

ANSI_ESCAPE = '\x1b['


# -------------------------------
# 1. Table content
# -------------------------------


def test_format_articles_renders_every_article():
    output = format_articles(ARTICLES, color=False)

    for article in ARTICLES:
        assert article['title'] in output
        assert article['url'] in output
        assert article['source']['name'] in output
    assert 'Something happened.' in output
    assert 'Oct 19, 2026' in output


def test_format_articles_keeps_order():
    output = format_articles(ARTICLES, color=False)
    assert output.index('First headline') < output.index('Second headline')


# -------------------------------
# 2. Options
# -------------------------------


def test_format_articles_reverse():
    output = format_articles(ARTICLES, color=False, reverse=True)
    assert output.index('Second headline') < output.index('First headline')


def test_format_articles_reverse_does_not_mutate_input():
    articles = list(ARTICLES)
    format_articles(articles, color=False, reverse=True)
    assert articles == ARTICLES


def test_format_articles_without_color():
    assert ANSI_ESCAPE not in format_articles(ARTICLES, color=False)


def test_format_articles_with_color():
    assert ANSI_ESCAPE in format_articles(ARTICLES, color=True)


# -------------------------------
# 3. Edge cases
# -------------------------------


def test_format_no_articles():
    assert format_articles([]) == NO_ARTICLES


def test_format_articles_with_missing_fields():
    output = format_articles([{'publishedAt': 'yesterday'}], color=False)
    assert 'Untitled' in output
    assert 'yesterday' in output


def test_format_articles_converts_offset_dates_to_utc():
    article = {'title': 'Offset', 'publishedAt': '2026-10-19T12:00:00+05:00'}
    output = format_articles([article], color=False)
    assert '07:00 UTC' in output
    assert '12:00 UTC' not in output


def test_format_articles_treats_naive_dates_as_utc():
    article = {'title': 'Naive', 'publishedAt': '2026-10-19T12:00:00'}
    assert '12:00 UTC' in format_articles([article], color=False)

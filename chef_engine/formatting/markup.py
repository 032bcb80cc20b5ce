"""Markdown subset to HTML conversion for recipe display.

Handles only what the recipe prompt produces: **bold**, *italic*, `## ` and
`### ` headings, and blank-line separated paragraphs. Every paragraph is
wrapped in <p class="ce-p">, including paragraphs that are only a heading, so
headings come out nested inside a paragraph. Clients style against that exact
shape, so keep it.

convert() is not idempotent: applying it to its own output adds another
level of paragraph wrapping.
"""

import re

STRONG = re.compile(r"\*\*(.*?)\*\*")
EMPHASIS = re.compile(r"\*(.*?)\*")
SUB_HEADING = re.compile(r"^### (.*)$", re.MULTILINE | re.IGNORECASE)
HEADING = re.compile(r"^## (.*)$", re.MULTILINE | re.IGNORECASE)

PARAGRAPH_BREAK = "\n\n"


def convert(markdown: str) -> str:
    """Render markdown as HTML. Steps run in order, each on the previous output."""
    html = STRONG.sub(r"<strong>\1</strong>", markdown)
    html = EMPHASIS.sub(r"<em>\1</em>", html)
    html = SUB_HEADING.sub(r'<h4 class="ce-h4">\1</h4>', html)
    html = HEADING.sub(r'<h3 class="ce-h3">\1</h3>', html)
    return "".join(f'<p class="ce-p">{paragraph}</p>' for paragraph in html.split(PARAGRAPH_BREAK))

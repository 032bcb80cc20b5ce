"""Unit tests for markdown to HTML conversion."""

from chef_engine.formatting.markup import convert


class TestInlineFormatting:
    """Test bold and italic replacement."""

    def test_bold(self):
        assert convert("**Garlic Chicken**") == '<p class="ce-p"><strong>Garlic Chicken</strong></p>'

    def test_italic(self):
        assert convert("a *pinch* of salt") == '<p class="ce-p">a <em>pinch</em> of salt</p>'

    def test_bold_is_non_greedy(self):
        """Two bold spans on one line stay separate."""
        assert convert("**a** and **b**") == '<p class="ce-p"><strong>a</strong> and <strong>b</strong></p>'

    def test_bold_before_italic(self):
        """Bold runs first, so ** is never read as two italics."""
        html = convert("**bold** and *it*")
        assert html == '<p class="ce-p"><strong>bold</strong> and <em>it</em></p>'

    def test_emphasis_does_not_span_lines(self):
        """An unmatched asterisk on one line is left alone."""
        assert convert("* one\n* two") == '<p class="ce-p">* one\n* two</p>'


class TestHeadings:
    """Test heading replacement and paragraph nesting."""

    def test_level_two_heading_is_nested_in_paragraph(self):
        assert convert("## Ingredients") == '<p class="ce-p"><h3 class="ce-h3">Ingredients</h3></p>'

    def test_level_three_heading(self):
        assert convert("### Tips") == '<p class="ce-p"><h4 class="ce-h4">Tips</h4></p>'

    def test_heading_must_start_line(self):
        """## in the middle of a line is not a heading."""
        assert convert("Step ## 2") == '<p class="ce-p">Step ## 2</p>'

    def test_heading_on_any_line(self):
        """Headings are matched per line, not just at the start of input."""
        assert convert("Intro\n## Steps") == '<p class="ce-p">Intro\n<h3 class="ce-h3">Steps</h3></p>'

    def test_level_one_heading_untouched(self):
        assert convert("# Title") == '<p class="ce-p"># Title</p>'


class TestParagraphs:
    """Test blank-line paragraph splitting."""

    def test_title_then_heading_with_body(self):
        """Bold title gets its own paragraph; heading and body share the next one."""
        html = convert("**Title**\n\n## Heading\nBody")
        assert html == (
            '<p class="ce-p"><strong>Title</strong></p>'
            '<p class="ce-p"><h3 class="ce-h3">Heading</h3>\nBody</p>'
        )

    def test_single_newlines_kept(self):
        assert convert("line one\nline two") == '<p class="ce-p">line one\nline two</p>'

    def test_empty_input(self):
        """Empty input is a single empty paragraph."""
        assert convert("") == '<p class="ce-p"></p>'

    def test_triple_newline_leaves_leading_newline(self):
        assert convert("a\n\n\nb") == '<p class="ce-p">a</p><p class="ce-p">\nb</p>'

    def test_full_recipe(self):
        markdown = "## Lemon Pasta\n\n**Ingredients**\n- pasta\n- lemon\n\n### Serving\nEnjoy *warm*."
        html = convert(markdown)
        assert html.count('<p class="ce-p">') == 3
        assert '<h3 class="ce-h3">Lemon Pasta</h3>' in html
        assert '<h4 class="ce-h4">Serving</h4>' in html
        assert "<em>warm</em>" in html


class TestNotIdempotent:
    """convert() is not meant to be reapplied."""

    def test_reapplying_adds_paragraph_nesting(self):
        once = convert("Just plain text")
        twice = convert(once)
        assert once == '<p class="ce-p">Just plain text</p>'
        assert twice == f'<p class="ce-p">{once}</p>'

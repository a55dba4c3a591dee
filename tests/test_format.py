"""End-to-end formatting tests: HTML source in, formatted text out."""

import io
import unittest

from htmlformat import format_document, format_fragment, format_html


def fragment(html):
    return format_html(html, fragment=True)


class TestFragmentFormatting(unittest.TestCase):
    def test_missing_closing_tags_are_inserted(self):
        assert fragment("<li>") == "<li>\n</li>\n"

    def test_attribute_escaping_is_normalized(self):
        html = '<ol> <li style="&amp;&#38;"> A </li> <li> B </li> </ol> '
        assert fragment(html) == '<ol>\n <li style="&amp;&amp;">A</li>\n <li>B</li>\n</ol>\n'

    def test_bare_ampersands_are_escaped(self):
        html = '<ol> <li style="&"> A </li> <li> B </li> </ol> '
        assert fragment(html) == '<ol>\n <li style="&amp;">A</li>\n <li>B</li>\n</ol>\n'

    def test_elements_are_indented(self):
        html = '<ol> <li class="name"> A </li> <li> B </li> </ol> '
        assert fragment(html) == '<ol>\n <li class="name">A</li>\n <li>B</li>\n</ol>\n'

    def test_text_fragments_are_supported(self):
        assert fragment("test 123") == "test 123\n"

    def test_punctuation_stays_on_the_same_line(self):
        html = '<ul><li><a href="http://example.com">Test</a>.</li></ul>'
        expected = '<ul>\n <li>\n  <a href="http://example.com">Test</a>.\n </li>\n</ul>\n'
        assert fragment(html) == expected

    def test_style_content_is_indented_consistently(self):
        html = "<style>\nbody {\n  text-color: red;\n}\n</style>"
        expected = "<style>\n  body {\n    text-color: red;\n  }\n</style>\n"
        assert fragment(html) == expected

    def test_script_content_is_indented_below_its_element(self):
        html = "<div><script>\nvar a = 1;\nif (a) {\n  go();\n}\n</script></div>"
        expected = "<div>\n <script>\n   var a = 1;\n   if (a) {\n     go();\n   }\n </script>\n</div>\n"
        assert fragment(html) == expected

    def test_void_elements_have_no_end_tag(self):
        assert fragment("<p>a<br>b</p>") == "<p>\n a\n <br>\n b\n</p>\n"
        assert fragment('<img src="a.png" alt="x">') == '<img src="a.png" alt="x">\n'

    def test_comments_get_their_own_line(self):
        assert fragment("<div><!-- hi --></div>") == "<div>\n <!-- hi -->\n</div>\n"

    def test_whitespace_only_text_is_dropped(self):
        assert fragment("<div>\n\n   <span>x</span>\n\t</div>") == "<div>\n <span>x</span>\n</div>\n"

    def test_inner_whitespace_of_text_is_kept(self):
        assert fragment("<p>  a   b  </p>") == "<p>a   b</p>\n"

    def test_top_level_fragment_nodes_are_not_glued(self):
        # Top-level fragment nodes have no siblings to glue to
        assert fragment("<a>x</a>.") == "<a>x</a>\n.\n"

    def test_text_content_is_not_escaped(self):
        assert fragment('<p title="&lt;x&gt;">a &amp; b</p>') == '<p title="&lt;x&gt;">a & b</p>\n'

    def test_template_contents_are_formatted(self):
        assert fragment("<template><b>x</b></template>") == "<template>\n <b>x</b>\n</template>\n"

    def test_separator_controls_are_not_trimmed(self):
        assert fragment("<p>\x1cx</p>") == "<p>\x1cx</p>\n"


class TestPreformattedContent(unittest.TestCase):
    def test_pre_with_single_text_child_is_verbatim(self):
        assert fragment("<pre>  x\n    y  </pre>") == "<pre>  x\n    y  </pre>\n"

    def test_pre_subtree_is_copied_through(self):
        html = "<div><pre>  a\n   b <b>x</b>\n</pre></div>"
        result = fragment(html)
        assert result == "<div>\n <pre>\n  a\n   b <b>x</b>\n</pre>\n</div>\n"
        assert "  a\n   b <b>x</b>\n" in result

    def test_void_elements_inside_pre_have_no_end_tag(self):
        assert fragment("<pre>a<br>b</pre>") == "<pre>\na<br>b</pre>\n"

    def test_comments_inside_pre_are_not_reindented(self):
        assert fragment("<pre>a<!--c-->b</pre>") == "<pre>\na<!--c-->b</pre>\n"

    def test_pre_leading_newline_survives_reparse(self):
        once = fragment("<pre>\n\nx</pre>")
        assert once == "<pre>\n\nx</pre>\n"
        assert fragment(once) == once


class TestDocumentFormatting(unittest.TestCase):
    def test_document_gets_implied_structure(self):
        result = format_html("<!DOCTYPE html><title>T</title><p>Hi</p>")
        expected = "<html>\n <head>\n  <title>T</title>\n </head>\n <body>\n  <p>Hi</p>\n </body>\n</html>\n"
        assert result == expected

    def test_format_document_writes_to_sink(self):
        out = io.StringIO()
        format_document("<p>Hi</p>", out)
        assert "  <p>Hi</p>\n" in out.getvalue()

    def test_format_fragment_uses_context(self):
        out = io.StringIO()
        format_fragment("<td>x</td>", out, context="tr")
        assert out.getvalue() == "<td>x</td>\n"


class TestIdempotence(unittest.TestCase):
    def test_reformatting_is_stable(self):
        sources = [
            '<ol> <li style="&amp;&#38;"> A </li> <li> B </li> </ol> ',
            '<ul><li><a href="http://example.com">Test</a>.</li></ul>',
            "<div><p>a<br>b</p><!-- note --></div>",
            "<pre>\n\n  x\n</pre>",
            "<p>\x1cx</p>",
        ]
        for source in sources:
            with self.subTest(source=source):
                once = fragment(source)
                assert fragment(once) == once

    def test_reformatting_style_deepens_nested_lines(self):
        # Lines keep their own leading whitespace, so nested rules drift right
        once = fragment("<style>\nbody {\n  color: red;\n}\n</style>")
        twice = fragment(once)
        assert twice == "<style>\n  body {\n      color: red;\n    }\n</style>\n"

import unittest

from error_trigram_study.analysis.extractor import (
    build_error_pattern,
    extract_errors,
    extract_from_posts,
)
from error_trigram_study.core.models import Post


class ExtractErrorsTest(unittest.TestCase):
    def test_blank_line_terminates_error(self):
        body = "Error in foo(x) : bad argument\n\nmore text"
        self.assertEqual(list(extract_errors(body)), ["Error in foo(x) : bad argument"])

    def test_warning_is_excluded(self):
        body = "Error in f() : boom\nWarning message:\nIn g() : NAs introduced"
        self.assertEqual(list(extract_errors(body)), ["Error in f() : boom"])

    def test_in_addition_is_excluded(self):
        body = "<pre>Error in h(1) : failed\nIn addition: Warning message:</pre>"
        self.assertEqual(list(extract_errors(body)), ["Error in h(1) : failed"])

    def test_markup_closing_tags_terminate(self):
        for tag in ("</p>", "</code>", "</pre>", "</blockquote>"):
            with self.subTest(tag=tag):
                body = f"<x>Error in a : b{tag} trailing"
                self.assertEqual(list(extract_errors(body)), ["Error in a : b"])

    def test_no_error_shape_yields_nothing(self):
        self.assertEqual(list(extract_errors("<p>All good here, no problems.</p>")), [])
        self.assertEqual(list(extract_errors("Error without colon</p>")), [])

    def test_empty_and_missing_body(self):
        self.assertEqual(list(extract_errors("")), [])
        self.assertEqual(list(extract_errors(None)), [])

    def test_match_is_case_sensitive(self):
        self.assertEqual(list(extract_errors("error in x : lower case</p>")), [])

    def test_requires_a_terminator(self):
        self.assertEqual(list(extract_errors("Error in x : runs to the end")), [])

    def test_multiple_matches(self):
        body = "<p>Error in a : one</p><p>text</p><p>Error in b : two</p>"
        self.assertEqual(list(extract_errors(body)), ["Error in a : one", "Error in b : two"])

    def test_match_spans_lines(self):
        body = "<pre>Error in g :\n  first line\n  second line</pre>"
        self.assertEqual(list(extract_errors(body)), ["Error in g :\n  first line\n  second line"])

    def test_prefix_may_span_lines(self):
        body = "Error in\ncall() : x</p>"
        self.assertEqual(list(extract_errors(body)), ["Error in\ncall() : x"])

    def test_shortest_match_wins(self):
        body = "Error: first</p> middle </p>"
        self.assertEqual(list(extract_errors(body)), ["Error: first"])

    def test_strips_at_most_one_trailing_newline(self):
        body = "Error: x\n\nEND"
        self.assertEqual(list(extract_errors(body, terminators=["END"])), ["Error: x\n"])

    def test_custom_terminators_are_literal(self):
        body = "Error: a (end) b"
        self.assertEqual(list(extract_errors(body, terminators=["(end)"])), ["Error: a "])

    def test_empty_terminator_list_rejected(self):
        with self.assertRaises(ValueError):
            build_error_pattern([])
        with self.assertRaises(ValueError):
            extract_errors("Error: x</p>", terminators=[""])


def test_extract_from_posts_flattens_and_skips_empty():
    posts = [
        Post(body="<p>Error in a : one</p>"),
        Post(body="<p>nothing to see</p>"),
        Post(body=""),
        Post(body="<p>Error in b : two</p>\n\n<p>Error in c : three</p>"),
    ]
    assert list(extract_from_posts(posts)) == [
        "Error in a : one",
        "Error in b : two",
        "Error in c : three",
    ]


def test_extractor_is_lazy():
    result = extract_errors("Error: x</p>")
    assert not isinstance(result, list)
    assert next(result) == "Error: x"


if __name__ == "__main__":
    unittest.main()

import unittest

from sfnews.ranking import normalize_url


class TestUrlNormalization(unittest.TestCase):
    def test_strips_tracking_params_and_sorts_the_rest(self):
        raw = "https://www.Example.com/story/?utm_source=x&id=2&gclid=AAA&a=1#comments"
        self.assertEqual(normalize_url(raw), "example.com/story?a=1&id=2")

    def test_homepage_ref_collapses_onto_plain_url(self):
        self.assertEqual(
            normalize_url("https://sfstandard.com/2025/01/15/muni-budget/?ref=homepage"),
            normalize_url("https://sfstandard.com/2025/01/15/muni-budget"),
        )

    def test_scheme_and_www_do_not_matter(self):
        self.assertEqual(
            normalize_url("http://www.missionlocal.org/a"),
            normalize_url("https://missionlocal.org/a/"),
        )

    def test_non_tracking_params_survive(self):
        self.assertNotEqual(
            normalize_url("https://example.com/watch?v=abc"),
            normalize_url("https://example.com/watch?v=def"),
        )
        self.assertEqual(normalize_url("https://example.com/watch?v=abc"), "example.com/watch?v=abc")

    def test_path_case_is_preserved(self):
        self.assertEqual(normalize_url("https://EXAMPLE.com/Some/Path"), "example.com/Some/Path")

    def test_archived_url_keeps_inner_path_case(self):
        key = normalize_url("https://web.archive.org/web/2020/https://sfstandard.com/Story")
        self.assertEqual(key, "web.archive.org/web/2020/https://sfstandard.com/Story")
        self.assertEqual(normalize_url(key), key)

    def test_unparseable_url_is_lowercased_without_fragment(self):
        self.assertEqual(normalize_url("http://[::1/Path#frag"), "http://[::1/path")

    def test_idempotent(self):
        urls = [
            "https://www.Example.com/story/?utm_source=x&id=2&a=1#c",
            "https://sfstandard.com/2025/01/15/muni-budget/?ref=homepage",
            "https://example.com/q?name=a+b&x=%2F",
            "https://web.archive.org/web/2020/https://sfstandard.com/Story",
            "http://[::1/Path#frag",
            "not a url",
            "",
        ]
        for url in urls:
            key = normalize_url(url)
            self.assertEqual(normalize_url(key), key, url)


if __name__ == "__main__":
    unittest.main()

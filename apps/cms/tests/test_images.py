from __future__ import annotations

from unittest.mock import MagicMock, patch

import requests
from django.test import SimpleTestCase

from apps.cms.images import is_allowed_remote_image
from apps.cms.portable_text import render_portable_text
from apps.cms.templatetags.cms_images import remote_image


class RemoteImageAllowlistTests(SimpleTestCase):
    def test_allowed_hosts(self) -> None:
        for url in (
            "https://res.cloudinary.com/demo/image/upload/x.jpg",
            "https://cdn.sanity.io/images/qziej56d/production/abc-800x600.jpg",
            "https://img.youtube.com/vi/abc/0.jpg",
            "https://i1.sndcdn.com/artworks-000123-t500x500.jpg",
        ):
            with self.subTest(url=url):
                self.assertTrue(is_allowed_remote_image(url))

    def test_rejected_urls(self) -> None:
        for url in (
            "http://res.cloudinary.com/demo/x.jpg",
            "https://cdn.sanity.io/files/qziej56d/production/a.mp3",
            "https://i1.sndcdn.com/avatars-000.jpg",
            "https://evil.example.com/x.jpg",
            "https://user@cdn.sanity.io/images/x.jpg",
            "not a url",
            "",
            None,
        ):
            with self.subTest(url=url):
                self.assertFalse(is_allowed_remote_image(url))

    def test_invalid_patterns_are_skipped(self) -> None:
        patterns = [
            {"protocol": "ftp", "hostname": "files.example.com"},
            {"hostname": ""},
            {"hostname": "Media.Example.com", "pathname": "/pics/**"},
        ]
        with self.assertLogs("cms.images", level="WARNING") as logs:
            self.assertTrue(is_allowed_remote_image("https://media.example.com/pics/a/b.jpg", patterns))
        self.assertEqual(len(logs.output), 2)
        self.assertFalse(is_allowed_remote_image("https://media.example.com/other.jpg", patterns[2:]))

    def test_remote_image_filter_swaps_disallowed_for_placeholder(self) -> None:
        allowed = "https://cdn.sanity.io/images/a.jpg"
        self.assertEqual(remote_image(allowed), allowed)
        self.assertTrue(remote_image("https://evil.example.com/x.jpg").endswith("img/placeholder.svg"))


class ImageProxyViewTests(SimpleTestCase):
    def test_disallowed_url_is_400(self) -> None:
        response = self.client.get("/_image", {"url": "https://evil.example.com/x.jpg"})
        self.assertEqual(response.status_code, 400)

    @patch("apps.cms.views.requests.get")
    def test_allowed_url_is_proxied(self, mock_get) -> None:
        upstream = MagicMock()
        upstream.content = b"\x89PNG"
        upstream.headers = {"Content-Type": "image/png"}
        mock_get.return_value = upstream

        response = self.client.get("/_image", {"url": "https://cdn.sanity.io/images/a.png"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content, b"\x89PNG")
        self.assertEqual(response["Content-Type"], "image/png")
        self.assertIn("max-age=", response["Cache-Control"])

    @patch("apps.cms.views.requests.get", side_effect=requests.ConnectionError("down"))
    def test_upstream_failure_is_502(self, _mock_get) -> None:
        response = self.client.get("/_image", {"url": "https://cdn.sanity.io/images/a.png"})
        self.assertEqual(response.status_code, 502)


class PortableTextTests(SimpleTestCase):
    def test_blocks_marks_and_lists(self) -> None:
        html = render_portable_text(
            [
                {"_type": "block", "style": "h2", "children": [{"_type": "span", "text": "Title"}]},
                {
                    "_type": "block",
                    "style": "normal",
                    "markDefs": [{"_key": "l1", "_type": "link", "href": "https://kamayakoi.com"}],
                    "children": [
                        {"_type": "span", "text": "<b>bold</b>", "marks": ["strong"]},
                        {"_type": "span", "text": " site", "marks": ["l1"]},
                    ],
                },
                {"_type": "block", "listItem": "bullet", "children": [{"_type": "span", "text": "one"}]},
                {"_type": "block", "listItem": "bullet", "children": [{"_type": "span", "text": "two"}]},
            ]
        )
        self.assertIn("<h2>Title</h2>", html)
        self.assertIn("<strong>&lt;b&gt;bold&lt;/b&gt;</strong>", html)
        self.assertIn('<a href="https://kamayakoi.com"', html)
        self.assertIn("<ul><li>one</li><li>two</li></ul>", html)

    def test_javascript_links_are_dropped(self) -> None:
        html = render_portable_text(
            [
                {
                    "_type": "block",
                    "markDefs": [{"_key": "x", "_type": "link", "href": "javascript:alert(1)"}],
                    "children": [{"_type": "span", "text": "click", "marks": ["x"]}],
                }
            ]
        )
        self.assertEqual(html, "<p>click</p>")

from __future__ import annotations

import json
from datetime import datetime, timedelta
from unittest.mock import call, patch

from django.core.cache import cache as djcache
from django.test import SimpleTestCase, override_settings
from django.utils import timezone

from apps.api.services import DEFAULT_TAGS, check_secret, revalidate
from apps.cms import cache

URL = "/api/revalidate"


class RevalidateServiceTests(SimpleTestCase):
    @patch("apps.api.services.cache.revalidate_path")
    @patch("apps.api.services.cache.revalidate_tag")
    def test_missing_keys_use_default_set(self, mock_tag, mock_path) -> None:
        report = revalidate({})
        self.assertTrue(report.used_defaults)
        self.assertEqual(mock_tag.call_args_list, [call(tag) for tag in DEFAULT_TAGS])
        mock_path.assert_called_once_with("/")

    @patch("apps.api.services.cache.revalidate_path")
    @patch("apps.api.services.cache.revalidate_tag")
    def test_null_keys_use_default_set(self, mock_tag, mock_path) -> None:
        revalidate({"tags": None, "paths": None})
        self.assertEqual(mock_tag.call_count, len(DEFAULT_TAGS))

    @patch("apps.api.services.cache.revalidate_path")
    @patch("apps.api.services.cache.revalidate_tag")
    def test_falsy_scalar_keys_use_default_set(self, mock_tag, mock_path) -> None:
        for payload in ({"tags": ""}, {"tags": 0}, {"tags": False, "paths": ""}, {"paths": None, "tags": 0.0}):
            with self.subTest(payload=payload):
                mock_tag.reset_mock()
                mock_path.reset_mock()
                report = revalidate(payload)
                self.assertTrue(report.used_defaults)
                self.assertEqual(mock_tag.call_args_list, [call(tag) for tag in DEFAULT_TAGS])
                mock_path.assert_called_once_with("/")

    @patch("apps.api.services.cache.revalidate_path")
    @patch("apps.api.services.cache.revalidate_tag")
    def test_empty_tag_list_skips_defaults(self, mock_tag, mock_path) -> None:
        report = revalidate({"tags": []})
        self.assertFalse(report.used_defaults)
        mock_tag.assert_not_called()
        mock_path.assert_not_called()

    @patch("apps.api.services.cache.revalidate_path")
    @patch("apps.api.services.cache.revalidate_tag")
    def test_only_paths_given(self, mock_tag, mock_path) -> None:
        revalidate({"paths": ["/events", "/blog"]})
        mock_tag.assert_not_called()
        self.assertEqual(mock_path.call_args_list, [call("/events"), call("/blog")])

    @patch("apps.api.services.cache.revalidate_path")
    @patch("apps.api.services.cache.revalidate_tag")
    def test_non_list_values_are_ignored(self, mock_tag, mock_path) -> None:
        report = revalidate({"tags": "events"})
        self.assertFalse(report.used_defaults)
        mock_tag.assert_not_called()

        report = revalidate({"tags": {}, "paths": ""})
        self.assertFalse(report.used_defaults)
        mock_tag.assert_not_called()
        mock_path.assert_not_called()

    def test_one_failing_tag_does_not_stop_the_rest(self) -> None:
        with self.assertLogs("api.revalidate", level="ERROR"):
            report = revalidate({"tags": ["events", "", "posts"]})
        self.assertEqual(report.tags, ["events", "posts"])
        self.assertEqual(len(report.failed), 1)

    def test_check_secret(self) -> None:
        self.assertTrue(check_secret("", None, None))
        self.assertTrue(check_secret("s3cret", "s3cret", None))
        self.assertTrue(check_secret("s3cret", None, "Bearer s3cret"))
        self.assertFalse(check_secret("s3cret", "wrong", None))
        self.assertFalse(check_secret("s3cret", None, "Basic s3cret"))
        self.assertFalse(check_secret("s3cret", None, None))


class RevalidateEndpointTests(SimpleTestCase):
    def setUp(self) -> None:
        djcache.clear()

    def _post(self, body, **extra):
        data = body if isinstance(body, str) else json.dumps(body)
        return self.client.post(URL, data=data, content_type="application/json", **extra)

    def test_tags_are_revalidated(self) -> None:
        key = cache.build_key("events-list")
        cache.set_entry(key, ["e"], tags=["events"])
        posts = cache.build_key("posts-list")
        cache.set_entry(posts, ["p"], tags=["posts"])
        home = cache.build_key("home-page")
        cache.set_entry(home, "<html>", tags=[cache.path_tag("/")])

        response = self._post({"tags": ["events"]})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["message"], "Revalidation completed")
        stamp = datetime.fromisoformat(body["timestamp"])
        self.assertIsNotNone(stamp.tzinfo)
        self.assertLess(abs(timezone.now() - stamp), timedelta(minutes=1))
        self.assertFalse(cache.get_entry(key)[0])
        self.assertEqual(cache.get_entry(posts), (True, ["p"]))
        self.assertEqual(cache.get_entry(home), (True, "<html>"))

    def test_empty_body_revalidates_defaults(self) -> None:
        home = cache.build_key("home-page")
        cache.set_entry(home, "<html>", tags=[cache.path_tag("/")])

        response = self.client.post(URL, data="", content_type="application/json")

        self.assertEqual(response.status_code, 200)
        self.assertFalse(cache.get_entry(home)[0])

    def test_malformed_json_is_500(self) -> None:
        with self.assertLogs("api.revalidate", level="ERROR"):
            response = self._post("{not json")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "Revalidation failed"})

    def test_non_object_body_is_500(self) -> None:
        with self.assertLogs("api.revalidate", level="ERROR"):
            response = self._post(["events"])
        self.assertEqual(response.status_code, 500)

    def test_get_is_not_allowed(self) -> None:
        self.assertEqual(self.client.get(URL).status_code, 405)

    @override_settings(REVALIDATE_SECRET="s3cret")
    def test_secret_required_when_configured(self) -> None:
        response = self._post({"tags": ["events"]})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"error": "Unauthorized"})

        response = self._post({"tags": ["events"]}, HTTP_X_REVALIDATE_SECRET="s3cret")
        self.assertEqual(response.status_code, 200)

        response = self._post({"tags": ["events"]}, HTTP_AUTHORIZATION="Bearer s3cret")
        self.assertEqual(response.status_code, 200)

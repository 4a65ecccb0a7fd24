from __future__ import annotations

import json
import sys
import unittest
from pathlib import Path

from pydantic import ValidationError

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from tavily_client.models import (
    TavilyCrawlRequest,
    TavilyCrawlResponse,
    TavilyExtractResponse,
    TavilyImage,
    TavilyMapResponse,
    TavilySearchRequest,
    TavilySearchResponse,
    parse_images,
)


class TestImageDecoding(unittest.TestCase):
    def test_plain_url_list_gets_empty_descriptions(self) -> None:
        images = parse_images(["http://a.com", "http://b.com"])
        self.assertEqual(
            images,
            [TavilyImage(url="http://a.com", description=""), TavilyImage(url="http://b.com", description="")],
        )

    def test_object_list_keeps_descriptions(self) -> None:
        images = parse_images([{"url": "http://a.com", "description": "x"}])
        self.assertEqual(len(images), 1)
        self.assertEqual(images[0].url, "http://a.com")
        self.assertEqual(images[0].description, "x")

    def test_object_without_description(self) -> None:
        images = parse_images([{"url": "http://a.com"}, {"url": "http://b.com", "description": None}])
        self.assertEqual([img.description for img in images], ["", ""])

    def test_invalid_shape_raises_format_error(self) -> None:
        with self.assertRaises(ValueError) as ctx:
            parse_images({"bad": 1})
        self.assertIn("images", str(ctx.exception))

    def test_null_and_empty(self) -> None:
        self.assertEqual(parse_images(None), [])
        self.assertEqual(parse_images([]), [])

    def test_search_response_normalizes_both_shapes(self) -> None:
        plain = TavilySearchResponse.model_validate_json(
            json.dumps({"query": "q", "images": ["http://a.com"], "response_time": 0.5})
        )
        detailed = TavilySearchResponse.model_validate_json(
            json.dumps({"query": "q", "images": [{"url": "http://a.com", "description": "d"}]})
        )
        self.assertEqual(plain.images, [TavilyImage(url="http://a.com")])
        self.assertEqual(detailed.images, [TavilyImage(url="http://a.com", description="d")])

    def test_search_response_rejects_bad_images(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            TavilySearchResponse.model_validate_json(json.dumps({"query": "q", "images": {"bad": 1}}))
        self.assertIn("images", str(ctx.exception))


class TestRequestEncoding(unittest.TestCase):
    def test_only_set_fields_are_sent(self) -> None:
        body = json.loads(TavilySearchRequest(query="who is Leo Messi?", max_results=5).to_json_bytes())
        self.assertEqual(body, {"query": "who is Leo Messi?", "max_results": 5})

    def test_false_and_zero_are_sent_when_explicit(self) -> None:
        body = json.loads(
            TavilySearchRequest(query="q", include_images=False, max_results=0, include_answer="basic").to_json_bytes()
        )
        self.assertEqual(body, {"query": "q", "include_images": False, "max_results": 0, "include_answer": "basic"})

    def test_documented_ranges_are_not_enforced(self) -> None:
        body = json.loads(
            TavilySearchRequest(query="q", max_results=500, topic="sports", search_depth="deep").to_json_bytes()
        )
        self.assertEqual(body["max_results"], 500)
        self.assertEqual(body["topic"], "sports")
        self.assertEqual(body["search_depth"], "deep")

    def test_extra_fields_are_forwarded(self) -> None:
        body = json.loads(TavilySearchRequest(query="q", country="france").to_json_bytes())
        self.assertEqual(body, {"query": "q", "country": "france"})

    def test_crawl_request_filters(self) -> None:
        request = TavilyCrawlRequest(
            url="https://docs.example.com",
            max_depth=2,
            select_paths=["/docs/.*"],
            exclude_domains=["^ads\\."],
            allow_external=False,
            categories=["Documentation"],
        )
        body = json.loads(request.to_json_bytes())
        self.assertEqual(
            body,
            {
                "url": "https://docs.example.com",
                "max_depth": 2,
                "select_paths": ["/docs/.*"],
                "exclude_domains": ["^ads\\."],
                "allow_external": False,
                "categories": ["Documentation"],
            },
        )


class TestResponseDecoding(unittest.TestCase):
    def test_extract_partial_failure_is_data(self) -> None:
        response = TavilyExtractResponse.model_validate_json(
            json.dumps(
                {
                    "results": [{"url": "https://ok.example", "raw_content": "hello", "images": []}],
                    "failed_results": [{"url": "https://bad.example", "error": "404"}],
                    "response_time": 1.2,
                }
            )
        )
        self.assertEqual(len(response.results), 1)
        self.assertEqual(len(response.failed_results), 1)
        self.assertEqual(response.failed_results[0].error, "404")

    def test_unknown_fields_are_ignored(self) -> None:
        response = TavilyMapResponse.model_validate_json(
            json.dumps({"base_url": "https://a.com", "results": ["https://a.com/x"], "usage": {"credits": 1}})
        )
        self.assertEqual(response.results, ["https://a.com/x"])

    def test_null_lists_and_missing_urls_take_defaults(self) -> None:
        extract = TavilyExtractResponse.model_validate_json(
            json.dumps(
                {
                    "results": [{"url": "https://ok.example", "images": None}],
                    "failed_results": [{"error": "x"}],
                }
            )
        )
        self.assertEqual(extract.results[0].images, [])
        self.assertEqual(extract.failed_results[0].url, "")
        self.assertEqual(extract.failed_results[0].error, "x")

        no_failures = TavilyExtractResponse.model_validate_json(json.dumps({"results": [], "failed_results": None}))
        self.assertEqual(no_failures.failed_results, [])

        crawl = TavilyCrawlResponse.model_validate_json(
            json.dumps({"base_url": "https://a.com", "results": [{"url": "https://a.com/", "images": None}]})
        )
        self.assertEqual(crawl.results[0].images, [])

        search = TavilySearchResponse.model_validate_json(
            json.dumps({"query": "q", "results": None, "images": None, "answer": None})
        )
        self.assertEqual(search.results, [])
        self.assertEqual(search.images, [])
        self.assertIsNone(search.answer)

        mapped = TavilyMapResponse.model_validate_json(json.dumps({"results": None, "response_time": None}))
        self.assertEqual(mapped.results, [])
        self.assertEqual(mapped.response_time, 0.0)

    def test_wrong_type_still_fails_after_null_tolerance(self) -> None:
        with self.assertRaises(ValidationError):
            TavilyExtractResponse.model_validate_json(json.dumps({"failed_results": [{"url": 1, "error": "x"}]}))
        with self.assertRaises(ValidationError):
            TavilyCrawlResponse.model_validate_json(json.dumps({"results": [{"url": "u", "images": "x"}]}))

    def test_wrong_field_type_fails(self) -> None:
        with self.assertRaises(ValidationError):
            TavilyMapResponse.model_validate_json(json.dumps({"results": "https://a.com/x"}))


if __name__ == "__main__":
    unittest.main()

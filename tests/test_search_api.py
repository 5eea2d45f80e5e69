"""Test news search API functionality."""

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer, unused_port

from cinenews.config import Settings
from cinenews.ingest.articles import (
    DEFAULT_DESCRIPTION,
    DEFAULT_SOURCE_NAME,
    DEFAULT_TITLE,
    NewsArticle,
    RawArticle,
)
from cinenews.ingest.newsapi import (
    MalformedPayloadError,
    MockNewsSearchClient,
    NewsSearchClient,
    SearchUnavailableError,
    parse_search_payload,
)

SAMPLE_ARTICLE = {
    "source": {"id": "variety", "name": "Variety"},
    "author": "Staff",
    "title": "Wicked sequel lands first trailer",
    "description": "The musical returns this winter.",
    "url": "https://variety.com/wicked-trailer",
    "urlToImage": "https://variety.com/wicked.jpg",
    "publishedAt": "2025-03-03T10:00:00Z",
    "content": "Full text...",
}


class TestParseSearchPayload:
    def test_ok_payload(self):
        articles = parse_search_payload({"status": "ok", "totalResults": 1, "articles": [SAMPLE_ARTICLE]})
        assert articles == [RawArticle(
            title="Wicked sequel lands first trailer",
            description="The musical returns this winter.",
            url="https://variety.com/wicked-trailer",
            image_url="https://variety.com/wicked.jpg",
            published_at="2025-03-03T10:00:00Z",
            source_name="Variety",
            author="Staff",
        )]

    def test_non_ok_status(self):
        with pytest.raises(SearchUnavailableError, match="rateLimited"):
            parse_search_payload({"status": "error", "code": "rateLimited"})

    @pytest.mark.parametrize("data", [[], "ok", None])
    def test_payload_must_be_object(self, data):
        with pytest.raises(MalformedPayloadError):
            parse_search_payload(data)

    def test_missing_articles_list(self):
        with pytest.raises(MalformedPayloadError, match="no articles list"):
            parse_search_payload({"status": "ok", "articles": None})

    def test_non_object_entries_are_skipped(self):
        articles = parse_search_payload({"status": "ok", "articles": [None, "junk", SAMPLE_ARTICLE]})
        assert len(articles) == 1


class TestArticles:
    def test_non_string_fields_are_absent(self):
        raw = RawArticle.from_payload({"title": 42, "source": "Variety", "urlToImage": None})
        assert raw.title is None
        assert raw.source_name is None
        assert raw.image_url is None

    def test_news_article_fills_placeholders(self):
        raw = RawArticle(title=None, description="", published_at="2025-03-03T10:00:00Z")
        article = NewsArticle.from_raw(raw, 4)
        assert article.id == "2025-03-03T10:00:00Z-4"
        assert article.title == DEFAULT_TITLE
        assert article.description == DEFAULT_DESCRIPTION
        assert article.source_name == DEFAULT_SOURCE_NAME

    def test_to_dict_uses_provider_shape(self):
        article = NewsArticle.from_raw(RawArticle.from_payload(SAMPLE_ARTICLE), 0)
        assert article.to_dict() == {
            "id": "2025-03-03T10:00:00Z-0",
            "title": "Wicked sequel lands first trailer",
            "description": "The musical returns this winter.",
            "url": "https://variety.com/wicked-trailer",
            "urlToImage": "https://variety.com/wicked.jpg",
            "publishedAt": "2025-03-03T10:00:00Z",
            "source": {"name": "Variety"},
            "author": "Staff",
        }

    def test_stable_id_ignores_batch_position(self):
        raw = RawArticle.from_payload(SAMPLE_ARTICLE)
        first = NewsArticle.from_raw(raw, 0)
        second = NewsArticle.from_raw(raw, 7)
        assert first.id != second.id
        assert first.stable_id == second.stable_id


def make_app(handler) -> web.Application:
    app = web.Application()
    app.router.add_get("/v2/everything", handler)
    return app


def settings_for(server: TestServer) -> Settings:
    return Settings(
        news_api_key="secret-key",
        news_api_url=str(server.make_url("/v2")),
        request_timeout_seconds=5,
    )


class TestNewsSearchClient:
    """Test the client against a local HTTP server."""

    @pytest.mark.asyncio
    async def test_search_sends_query_and_key(self):
        seen = {}

        async def handler(request):
            seen["params"] = dict(request.query)
            seen["api_key"] = request.headers.get("X-Api-Key")
            return web.json_response({"status": "ok", "articles": [SAMPLE_ARTICLE]})

        async with TestServer(make_app(handler)) as server:
            async with NewsSearchClient(settings_for(server)) as client:
                articles = await client.search("box office", page_size=20)

        assert [a.title for a in articles] == ["Wicked sequel lands first trailer"]
        assert seen["api_key"] == "secret-key"
        assert seen["params"] == {
            "q": "box office",
            "language": "en",
            "sortBy": "publishedAt",
            "pageSize": "20",
        }

    @pytest.mark.asyncio
    async def test_search_without_shared_session(self):
        async def handler(request):
            return web.json_response({"status": "ok", "articles": []})

        async with TestServer(make_app(handler)) as server:
            client = NewsSearchClient(settings_for(server))
            assert await client.search("film") == []
            assert client.session is None

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        async def handler(request):
            return web.json_response({"status": "error"}, status=500)

        async with TestServer(make_app(handler)) as server:
            with pytest.raises(SearchUnavailableError, match="HTTP 500"):
                await NewsSearchClient(settings_for(server)).search("film")

    @pytest.mark.asyncio
    async def test_provider_error_status(self):
        async def handler(request):
            return web.json_response({"status": "error", "code": "apiKeyInvalid", "message": "Bad key"})

        async with TestServer(make_app(handler)) as server:
            with pytest.raises(SearchUnavailableError, match="Bad key"):
                await NewsSearchClient(settings_for(server)).search("film")

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        async def handler(request):
            return web.Response(text="<html>gateway</html>", content_type="text/html")

        async with TestServer(make_app(handler)) as server:
            with pytest.raises(MalformedPayloadError):
                await NewsSearchClient(settings_for(server)).search("film")

    @pytest.mark.asyncio
    async def test_connection_refused(self):
        settings = Settings(news_api_key="k", news_api_url=f"http://127.0.0.1:{unused_port()}/v2")
        with pytest.raises(SearchUnavailableError):
            await NewsSearchClient(settings).search("film")


class TestMockNewsSearchClient:
    @pytest.mark.asyncio
    async def test_returns_sample_batch(self):
        client = MockNewsSearchClient()
        articles = await client.search("anything")
        assert len(articles) == 9
        assert client.queries == ["anything"]

    @pytest.mark.asyncio
    async def test_page_size_truncates(self):
        assert len(await MockNewsSearchClient().search("q", page_size=3)) == 3

    @pytest.mark.asyncio
    async def test_custom_error_payload(self):
        client = MockNewsSearchClient(payload={"status": "error", "code": "rateLimited"})
        with pytest.raises(SearchUnavailableError):
            await client.search("q")

import json

import httpx
import pytest

from fetchers.weibo_trend_fetcher import (
    FALLBACK_TRENDS,
    REQUEST_HEADERS,
    fetch_weibo_trends,
    parse_heat,
    parse_trend_payload,
    resolve_trends,
)
from report_engine.models import FetchResult, TrendItem


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def _json_client(payload, status_code: int = 200) -> httpx.Client:
    return _client(lambda request: httpx.Response(status_code, json=payload))


TIANAPI_PAYLOAD = {
    "code": 200,
    "msg": "success",
    "result": {
        "list": [
            {"hotword": "春节档电影", "hotwordnum": 2345678, "hottag": "热"},
            {"hotword": "考研成绩公布", "hotwordnum": "1,200,000"},
            {"hotword": "周末天气"},
        ]
    },
}

WEIBO_PAYLOAD = {
    "ok": 1,
    "data": {
        "realtime": [
            {"word": "新品发布会", "num": 987654, "rank": 0},
            {"note": "城市马拉松", "num": 45678, "rank": 1},
            {"word": "", "num": 10},
            {"word": "露营装备", "num": 1234},
        ]
    },
}


def test_tianapi_shape_assigns_positional_ranks(config):
    result = fetch_weibo_trends(config, client=_json_client(TIANAPI_PAYLOAD))

    assert result.ok
    assert result.source == "tianapi"
    assert [item.rank for item in result.items] == [1, 2, 3]
    assert result.items[0] == TrendItem(title="春节档电影", heat=2345678, rank=1)
    assert result.items[1].heat == 1_200_000
    assert result.items[2].heat == 0


def test_tianapi_falls_back_to_title_field():
    payload = {"code": 200, "result": {"list": [{"title": "备用标题", "hotwordnum": 5}]}}
    result = parse_trend_payload(payload)
    assert result.items == [TrendItem(title="备用标题", heat=5, rank=1)]


def test_weibo_shape_keeps_source_rank_and_fills_missing(config):
    result = fetch_weibo_trends(config, client=_json_client(WEIBO_PAYLOAD))

    assert result.source == "weibo"
    titles = [item.title for item in result.items]
    assert titles == ["新品发布会", "城市马拉松", "露营装备"]
    # rank 0 is not a valid rank, position is used instead; untitled entry is skipped
    assert [item.rank for item in result.items] == [1, 1, 4]


def test_request_sends_browser_headers(config):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        return httpx.Response(200, json=TIANAPI_PAYLOAD)

    fetch_weibo_trends(config, client=_client(handler))

    assert seen["url"] == config.trend_endpoint
    for name, value in REQUEST_HEADERS.items():
        assert seen["headers"][name] == value


@pytest.mark.parametrize("status", [201, 301, 403, 404, 500, 503])
def test_non_200_status_returns_empty(config, status):
    result = fetch_weibo_trends(config, client=_json_client(TIANAPI_PAYLOAD, status_code=status))
    assert result.items == []
    assert result.error == f"HTTP {status}"


def test_malformed_json_returns_empty(config):
    client = _client(lambda request: httpx.Response(200, text="{not json"))
    result = fetch_weibo_trends(config, client=client)
    assert result.items == []
    assert result.error.startswith("Parse error")


def test_unknown_shape_returns_empty(config):
    result = fetch_weibo_trends(config, client=_json_client({"code": 250, "msg": "key expired"}))
    assert result.items == []
    assert result.error == "Unknown response format"


def test_non_object_payload_returns_empty():
    assert parse_trend_payload(["a", "b"]).items == []


def test_transport_error_returns_empty(config):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    result = fetch_weibo_trends(config, client=_client(handler))
    assert result.items == []
    assert "connection refused" in result.error


def test_timeout_returns_empty(config):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    result = fetch_weibo_trends(config, client=_client(handler))
    assert result.items == []
    assert result.error == "Request timeout"


def test_endpoint_without_scheme_returns_empty(config):
    bad = config.model_copy(update={"trend_endpoint": "weibo.com/ajax/side/hotSearch"})
    result = fetch_weibo_trends(bad)
    assert result.items == []
    assert result.error is not None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, 0),
        (1234, 1234),
        (-5, 0),
        (12.9, 12),
        ("1,234", 1234),
        ("3k", 3000),
        ("12.5万", 125000),
        ("2亿", 200_000_000),
        ("hot", 0),
        (float("nan"), 0),
        ("9" * 400, 0),
        ("9" * 400 + "万", 0),
        (True, 0),
    ],
)
def test_parse_heat(raw, expected):
    assert parse_heat(raw) == expected


def test_resolve_trends_uses_fallback_when_empty():
    trends = resolve_trends(FetchResult.failure("HTTP 500"))
    assert len(trends) == 5
    assert trends == list(FALLBACK_TRENDS)
    assert [t.title for t in trends] == [
        "人工智能发展趋势",
        "新能源汽车市场",
        "远程办公工具",
        "健康生活方式",
        "在线教育平台",
    ]
    assert [t.heat for t in trends] == [5_000_000, 4_500_000, 4_000_000, 3_500_000, 3_000_000]


def test_resolve_trends_uses_fallback_for_empty_success():
    assert resolve_trends(FetchResult(items=[], source="weibo")) == list(FALLBACK_TRENDS)


def test_resolve_trends_passes_real_items_through():
    items = [TrendItem(title="实时话题", heat=1, rank=1)]
    assert resolve_trends(FetchResult(items=items, source="weibo")) == items


def test_fetch_result_serializes_items():
    result = parse_trend_payload(TIANAPI_PAYLOAD)
    dumped = json.loads(result.model_dump_json())
    assert dumped["items"][0]["title"] == "春节档电影"


def test_oversized_heat_string_does_not_break_fetch(config):
    payload = {"data": {"realtime": [{"word": "超大热度", "num": "9" * 400, "rank": 1}]}}
    result = fetch_weibo_trends(config, client=_json_client(payload))
    assert result.ok
    assert result.items == [TrendItem(title="超大热度", heat=0, rank=1)]


def test_default_client_does_not_follow_redirects(config, monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/moved":
            return httpx.Response(200, json={"data": {"realtime": [{"word": "redirected", "num": 1}]}})
        return httpx.Response(302, headers={"Location": "https://apis.example.com/moved"})

    real_client = httpx.Client
    monkeypatch.setattr(
        httpx, "Client", lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs)
    )

    result = fetch_weibo_trends(config)
    assert result.items == []
    assert result.error == "HTTP 302"


def test_fetch_result_ok_requires_items_and_no_error():
    item = TrendItem(title="话题", heat=1, rank=1)
    assert FetchResult(items=[item], source="weibo").ok
    assert not FetchResult(items=[], source="weibo").ok
    assert not FetchResult.failure("HTTP 500").ok

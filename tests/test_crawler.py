# Test-suite for the MailScout breadth-first crawler
from __future__ import annotations

import pytest
from aiohttp import web

import mail_scout.crawler.crawler as crawler_module
from conftest import SEED, StubFetcher, html
from mail_scout.crawler.crawler import CrawlerEngine
from mail_scout.crawler.fetcher import HttpFetcher
from mail_scout.crawler.models import ExtractionResult, FetchResponse
from mail_scout.errors import DomainExtractionFailure, InvalidSeedURL


# --------------------------------------------------------------------------- #
#                               Scenarios                                     #
# --------------------------------------------------------------------------- #


@pytest.mark.asyncio()
async def test_single_page_depth_zero():
    fetcher = StubFetcher({SEED: html("Contact us at info@example.com")})
    results = await CrawlerEngine(fetcher).crawl("https://example.com", max_depth=0)

    assert results == [ExtractionResult("info@example.com", SEED)]
    assert fetcher.calls == [SEED]


@pytest.mark.asyncio()
async def test_follows_link_to_next_depth():
    fetcher = StubFetcher(
        {
            SEED: html('<a href="/about">About</a>'),
            "https://example.com/about": html("Email: contact@example.com"),
        }
    )
    results = await CrawlerEngine(fetcher).crawl(SEED, max_depth=1)

    assert fetcher.calls == [SEED, "https://example.com/about"]
    assert results == [ExtractionResult("contact@example.com", "https://example.com/about")]


@pytest.mark.asyncio()
async def test_self_link_is_not_fetched_twice(events):
    fetcher = StubFetcher(
        {
            SEED: html('<a href="/">Home</a><a href="/page">Page</a> test@example.com'),
            "https://example.com/page": html('<a href="/">Home</a> page@example.com'),
        }
    )
    results = await CrawlerEngine(fetcher, events=events).crawl(SEED, max_depth=2)

    assert fetcher.calls == [SEED, "https://example.com/page"]
    assert [r.email for r in results] == ["test@example.com", "page@example.com"]


@pytest.mark.asyncio()
@pytest.mark.parametrize("cross_domain,expected_calls", [
    (False, [SEED]),
    (True, [SEED, "https://external.com/x"]),
])
async def test_cross_domain_policy(cross_domain, expected_calls):
    fetcher = StubFetcher(
        {
            SEED: html('<a href="https://external.com/x">X</a>'),
            "https://external.com/x": html("ext@external.com"),
        }
    )
    await CrawlerEngine(fetcher).crawl(SEED, max_depth=1, cross_domain=cross_domain)
    assert fetcher.calls == expected_calls


@pytest.mark.asyncio()
async def test_server_error_is_page_local(events):
    fetcher = StubFetcher(
        {
            SEED: html('<a href="/a">a</a><a href="/b">b</a><a href="/c">c</a>'),
            "https://example.com/a": html("a@example.com"),
            "https://example.com/b": FetchResponse(500, html("b@example.com")),
            "https://example.com/c": html("c@example.com"),
        }
    )
    engine = CrawlerEngine(fetcher, events=events)
    results = await engine.crawl(SEED, max_depth=1)

    assert len(fetcher.calls) == 4
    assert [r.email for r in results] == ["a@example.com", "c@example.com"]
    assert engine.stats.pages_failed == 1
    assert events.named("http_skip") == [("http_skip", "https://example.com/b", 500)]


@pytest.mark.asyncio()
async def test_fetch_error_is_page_local():
    fetcher = StubFetcher(
        {
            SEED: html('<a href="/down">down</a><a href="/up">up</a>'),
            "https://example.com/down": FetchResponse(0, error="Connection timeout"),
            "https://example.com/up": html("up@example.com"),
        }
    )
    results = await CrawlerEngine(fetcher).crawl(SEED, max_depth=1)
    assert [r.source_url for r in results] == ["https://example.com/up"]


@pytest.mark.asyncio()
async def test_parse_failure_is_page_local(events):
    def fragile_parser(body):
        if "BROKEN" in body:
            raise ValueError("cannot parse")
        return crawler_module.parse_html(body)

    fetcher = StubFetcher(
        {
            SEED: html('<a href="/broken">1</a><a href="/fine">2</a>'),
            "https://example.com/broken": "BROKEN broken@example.com",
            "https://example.com/fine": html("fine@example.com"),
        }
    )
    engine = CrawlerEngine(fetcher, parser=fragile_parser, events=events)
    results = await engine.crawl(SEED, max_depth=1)

    assert [r.email for r in results] == ["fine@example.com"]
    assert events.named("parse_error") == [
        ("parse_error", "https://example.com/broken", "cannot parse")
    ]


@pytest.mark.asyncio()
async def test_depth_zero_never_enqueues_links():
    fetcher = StubFetcher({SEED: html('<a href="/a">a</a><a href="/b">b</a>')})
    await CrawlerEngine(fetcher).crawl(SEED, max_depth=0)
    assert fetcher.calls == [SEED]


# --------------------------------------------------------------------------- #
#                               Properties                                    #
# --------------------------------------------------------------------------- #


def _tree_site() -> dict[str, str]:
    # seed -> a, b ; a -> a1, b ; b -> b1 ; a1 -> a2 ; b1 -> seed
    return {
        SEED: html('<a href="/a">a</a><a href="/b">b</a>'),
        "https://example.com/a": html('<a href="/a1">a1</a><a href="/b">b</a>'),
        "https://example.com/b": html('<a href="/b1">b1</a>'),
        "https://example.com/a1": html('<a href="/a2">a2</a>'),
        "https://example.com/b1": html('<a href="/">home</a>'),
        "https://example.com/a2": html("deep@example.com"),
    }


@pytest.mark.asyncio()
async def test_breadth_first_order(events):
    fetcher = StubFetcher(_tree_site())
    await CrawlerEngine(fetcher, events=events).crawl(SEED, max_depth=3)

    assert fetcher.calls == [
        SEED,
        "https://example.com/a",
        "https://example.com/b",
        "https://example.com/a1",
        "https://example.com/b1",
        "https://example.com/a2",
    ]
    depths = [depth for _, _, depth in events.named("visit")]
    assert depths == sorted(depths)


@pytest.mark.asyncio()
async def test_each_url_fetched_once(events):
    fetcher = StubFetcher(_tree_site())
    await CrawlerEngine(fetcher, events=events).crawl(SEED, max_depth=3)

    assert len(fetcher.calls) == len(set(fetcher.calls))
    # /b was queued twice (from seed and from /a) and collapsed at dequeue time
    assert ("skip", "https://example.com/b", "already-visited") in events.events


@pytest.mark.asyncio()
@pytest.mark.parametrize("max_depth,expected", [(0, 1), (1, 3), (2, 5), (3, 6)])
async def test_depth_bound(max_depth, expected):
    fetcher = StubFetcher(_tree_site())
    await CrawlerEngine(fetcher).crawl(SEED, max_depth=max_depth)
    assert len(fetcher.calls) == expected


@pytest.mark.asyncio()
@pytest.mark.parametrize("max_pages", [1, 2, 4])
async def test_page_budget(max_pages):
    fetcher = StubFetcher(_tree_site())
    engine = CrawlerEngine(fetcher)
    await engine.crawl(SEED, max_depth=5, max_pages=max_pages)

    assert len(fetcher.calls) == max_pages
    assert engine.stats.pages_visited == max_pages


@pytest.mark.asyncio()
async def test_failed_pages_count_against_budget():
    fetcher = StubFetcher({SEED: html('<a href="/gone">x</a><a href="/ok">y</a>')})
    engine = CrawlerEngine(fetcher)
    await engine.crawl(SEED, max_depth=1, max_pages=2)
    assert fetcher.calls == [SEED, "https://example.com/gone"]


@pytest.mark.asyncio()
async def test_same_domain_only_enqueues_exact_host():
    fetcher = StubFetcher(
        {
            SEED: html(
                '<a href="https://www.example.com/">www</a>'
                '<a href="https://blog.example.com/">blog</a>'
                '<a href="http://example.com/plain">http</a>'
            ),
        }
    )
    await CrawlerEngine(fetcher).crawl(SEED, max_depth=1)
    assert fetcher.calls == [SEED, "http://example.com/plain"]


@pytest.mark.asyncio()
async def test_queue_cap_drops_excess_links(events):
    links = "".join(f'<a href="/p{i}">{i}</a>' for i in range(1, 6))
    fetcher = StubFetcher({SEED: html(links)})
    engine = CrawlerEngine(fetcher, events=events, max_queue_size=2)
    await engine.crawl(SEED, max_depth=1)

    assert fetcher.calls == [SEED, "https://example.com/p1", "https://example.com/p2"]
    assert engine.stats.links_dropped == 3
    assert [e[1] for e in events.named("queue_full")] == [
        "https://example.com/p3",
        "https://example.com/p4",
        "https://example.com/p5",
    ]


def test_queue_cap_must_be_positive():
    with pytest.raises(ValueError):
        CrawlerEngine(StubFetcher({}), max_queue_size=0)


@pytest.mark.asyncio()
async def test_results_keep_duplicates_across_pages():
    fetcher = StubFetcher(
        {
            SEED: html('info@example.com <a href="/x">x</a>'),
            "https://example.com/x": html("INFO@example.com info@example.com"),
        }
    )
    results = await CrawlerEngine(fetcher).crawl(SEED, max_depth=1)
    assert results == [
        ExtractionResult("info@example.com", SEED),
        ExtractionResult("INFO@example.com", "https://example.com/x"),
        ExtractionResult("info@example.com", "https://example.com/x"),
    ]


@pytest.mark.asyncio()
async def test_urls_are_normalized_before_fetch():
    fetcher = StubFetcher(
        {"https://example.com/": html('<a href="/About/?b=2&a=1#team">about</a>')}
    )
    await CrawlerEngine(fetcher).crawl("HTTPS://Example.com:443", max_depth=1)
    assert fetcher.calls == [SEED, "https://example.com/About?a=1&b=2"]


# --------------------------------------------------------------------------- #
#                               Fatal errors                                  #
# --------------------------------------------------------------------------- #


@pytest.mark.asyncio()
@pytest.mark.parametrize("seed", ["not a url", "example.com", "ftp://example.com", "", "http://"])
async def test_invalid_seed(seed):
    fetcher = StubFetcher({})
    with pytest.raises(InvalidSeedURL):
        await CrawlerEngine(fetcher).crawl(seed)
    assert fetcher.calls == []


@pytest.mark.asyncio()
async def test_domain_extraction_failure(monkeypatch):
    monkeypatch.setattr(crawler_module, "extract_domain", lambda url: "")
    fetcher = StubFetcher({SEED: html("")})
    with pytest.raises(DomainExtractionFailure):
        await CrawlerEngine(fetcher).crawl(SEED)
    assert fetcher.calls == []


# --------------------------------------------------------------------------- #
#                          End-to-end over HTTP                               #
# --------------------------------------------------------------------------- #


@pytest.mark.asyncio()
async def test_crawl_live_site(serve_app):
    app = web.Application()

    async def root(_):
        return web.Response(
            text=html(
                'Sales: sales@example.com <a href="/contact">Contact</a>'
                '<a href="/missing">Broken</a><a href="/boom">Boom</a>'
            ),
            content_type="text/html",
        )

    async def contact(_):
        return web.Response(
            text=html('Write to support@example.com <a href="/">Home</a>'), content_type="text/html"
        )

    async def boom(_):
        return web.Response(status=500, text="oops@example.com")

    app.router.add_get("/", root)
    app.router.add_get("/contact", contact)
    app.router.add_get("/boom", boom)
    base = await serve_app(app)

    async with HttpFetcher(timeout=5.0) as fetcher:
        engine = CrawlerEngine(fetcher)
        results = await engine.crawl(base, max_depth=2)

    assert [(r.email, r.source_url) for r in results] == [
        ("sales@example.com", f"{base}/"),
        ("support@example.com", f"{base}/contact"),
    ]
    assert engine.stats.pages_visited == 4
    assert engine.stats.pages_failed == 2

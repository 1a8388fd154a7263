"""Bounded Fetch/Extract Pipeline 유닛 테스트"""
import asyncio

import pytest

from fixtures import PAGES
from src.core.exceptions import (
    HttpStatusException,
    NetworkTimeoutException,
    UpstreamUnavailableException,
)
from src.crawlers.pipeline import BoundedExtractPipeline
from src.schemas.price_schema import SearchResult


def _results(links):
    return [SearchResult(title=f"item {i}", link=link) for i, link in enumerate(links)]


class TestPipelineConcurrency:
    """동시 진행 상한 테스트"""

    @pytest.mark.asyncio
    async def test_never_more_than_cap(self, fake_http_factory):
        links = [f"https://www.amazon.com/dp/{i}" for i in range(10)]
        http = fake_http_factory(pages={link: (200, PAGES["amazon"]) for link in links}, delay=0.01)
        pipeline = BoundedExtractPipeline(http_client=http, concurrency=5, timeout_s=1, max_candidates=10)

        products = await pipeline.run(_results(links))

        assert len(products) == 10
        assert http.max_in_flight == 5

    @pytest.mark.asyncio
    async def test_cap_shared_across_concurrent_runs(self, fake_http_factory):
        """같은 파이프라인으로 동시에 들어온 요청도 같은 상한을 공유"""
        links = [f"https://www.amazon.com/dp/{i}" for i in range(16)]
        http = fake_http_factory(pages={link: (200, PAGES["amazon"]) for link in links}, delay=0.01)
        pipeline = BoundedExtractPipeline(http_client=http, concurrency=3, timeout_s=1, max_candidates=10)

        await asyncio.gather(
            pipeline.run(_results(links[:8])),
            pipeline.run(_results(links[8:])),
        )

        assert http.max_in_flight <= 3

    @pytest.mark.asyncio
    async def test_only_first_candidates_fetched(self, fake_http_factory):
        links = [f"https://www.amazon.com/dp/{i}" for i in range(15)]
        http = fake_http_factory(pages={link: (200, PAGES["amazon"]) for link in links})
        pipeline = BoundedExtractPipeline(http_client=http, concurrency=5, timeout_s=1, max_candidates=10)

        await pipeline.run(_results(links))

        assert sorted(http.requested) == sorted(links[:10])


class TestPipelineFailures:
    """항목 단위 실패 격리 테스트"""

    @pytest.mark.asyncio
    async def test_failures_dropped_order_kept(self, fake_http_factory, fetch_error):
        http = fake_http_factory(
            pages={
                "https://www.amazon.com/dp/1": (200, PAGES["amazon"]),
                "https://www.amazon.com/broken": fetch_error,
                "https://www.walmart.com/ip/2": (200, PAGES["walmart"]),
                "https://www.target.com/p/missing": (404, "not found"),
                "https://www.walmart.com/ip/slow": NetworkTimeoutException("GET", 1.0),
                "https://www.walmart.com/ip/no-price": (200, PAGES["no_price"]),
            }
        )
        pipeline = BoundedExtractPipeline(http_client=http, concurrency=5, timeout_s=1, max_candidates=10)

        products = await pipeline.run(
            _results(
                [
                    "https://www.amazon.com/dp/1",
                    "https://www.amazon.com/broken",
                    "https://www.walmart.com/ip/2",
                    "https://www.target.com/p/missing",
                    "https://www.walmart.com/ip/slow",
                    "https://www.walmart.com/ip/no-price",
                ]
            )
        )

        assert [p.url for p in products] == ["https://www.amazon.com/dp/1", "https://www.walmart.com/ip/2"]
        assert [p.price for p in products] == ["$49.99", "$24.97"]
        assert products[1].source == "walmart.com"

    @pytest.mark.asyncio
    async def test_all_fail(self, fake_http_factory):
        http = fake_http_factory(pages={})
        pipeline = BoundedExtractPipeline(http_client=http, concurrency=5, timeout_s=1, max_candidates=10)

        with pytest.raises(UpstreamUnavailableException):
            await pipeline.run(_results(["https://www.amazon.com/dp/1", "https://www.amazon.com/dp/2"]))

    @pytest.mark.asyncio
    async def test_empty_input(self, fake_http_factory):
        pipeline = BoundedExtractPipeline(http_client=fake_http_factory(), concurrency=5, timeout_s=1)
        assert await pipeline.run([]) == []

    @pytest.mark.asyncio
    async def test_non_2xx_raises_for_single_fetch(self, fake_http_factory):
        http = fake_http_factory(pages={"https://www.amazon.com/dp/1": (503, "")})
        pipeline = BoundedExtractPipeline(http_client=http, concurrency=5, timeout_s=1)

        with pytest.raises(HttpStatusException):
            await pipeline.fetch_and_extract(SearchResult(title="x", link="https://www.amazon.com/dp/1"))

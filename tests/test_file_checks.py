"""Tests for the llms.txt, robots.txt and sitemap checks and the file-check runner."""

import logging

import httpx
import pytest

from readiness.base import FileCheckContext, RobotsCheckResult
from readiness.file_checks import (
    LLMS_CHECK,
    ROBOTS_CHECK,
    SITEMAP_CHECK,
    extract_sitemap_urls,
    is_llms_txt_content,
    is_sitemap_content,
    sitemap_candidates,
)
from readiness.runner import run_file_checks

BASE = "https://example.com"
CONTEXT = FileCheckContext(base_url=BASE)

SITEMAP_XML = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">'
    "<url><loc>https://example.com/</loc></url></urlset>"
)
LLMS_TXT = "# Example\n\n> Docs for language models.\n\n- [API](https://example.com/api)\n"


class TestLlmsTxt:
    @pytest.mark.asyncio
    async def test_found(self, fake_web):
        web = fake_web({f"{BASE}/llms.txt": LLMS_TXT})

        async with web.client() as client:
            result = await LLMS_CHECK.run(CONTEXT, client)

        assert result.score == 100
        assert result.status == "pass"
        assert result.details == "llms.txt file found with AI usage guidelines"

    @pytest.mark.asyncio
    async def test_probes_all_variants(self, fake_web):
        web = fake_web({f"{BASE}/llms-full.txt": LLMS_TXT})

        async with web.client() as client:
            result = await LLMS_CHECK.run(CONTEXT, client)

        assert result.status == "pass"
        assert result.details.startswith("llms-full.txt")
        assert sorted(web.requested) == sorted(
            [f"{BASE}/llms.txt", f"{BASE}/LLMs.txt", f"{BASE}/llms-full.txt"]
        )

    @pytest.mark.asyncio
    async def test_declared_order_wins(self, fake_web):
        web = fake_web({f"{BASE}/llms-full.txt": LLMS_TXT, f"{BASE}/LLMs.txt": LLMS_TXT})

        async with web.client() as client:
            result = await LLMS_CHECK.run(CONTEXT, client)

        assert result.details.startswith("LLMs.txt")

    @pytest.mark.asyncio
    async def test_soft_404_html_page_is_rejected(self, fake_web):
        web = fake_web({f"{BASE}/llms.txt": "<!DOCTYPE html><html><body>Welcome</body></html>"})

        async with web.client() as client:
            result = await LLMS_CHECK.run(CONTEXT, client)

        assert result.score == 0
        assert result.status == "fail"
        assert result.details == "No llms.txt file found"

    @pytest.mark.asyncio
    async def test_network_errors_degrade_to_not_found(self, fake_web):
        web = fake_web(
            {
                f"{BASE}/llms.txt": httpx.ConnectError("refused"),
                f"{BASE}/LLMs.txt": httpx.ReadTimeout("slow"),
                f"{BASE}/llms-full.txt": httpx.Response(500, text="oops, server error"),
            }
        )

        async with web.client() as client:
            result = await LLMS_CHECK.run(CONTEXT, client)

        assert result.status == "fail"

    def test_content_validation(self):
        assert is_llms_txt_content(LLMS_TXT)
        assert not is_llms_txt_content("too short")
        assert not is_llms_txt_content("<HTML><body>hello world</body></HTML>")
        assert not is_llms_txt_content("Error: 404 Not Found on this server")
        assert not is_llms_txt_content("Sorry, that Page Not Found anywhere")


class TestRobotsTxt:
    @pytest.mark.asyncio
    async def test_user_agent_and_sitemap(self, fake_web):
        web = fake_web(
            {f"{BASE}/robots.txt": "User-agent: *\nSitemap: https://example.com/sitemap.xml"}
        )

        async with web.client() as client:
            result = await ROBOTS_CHECK.run(CONTEXT, client)

        assert isinstance(result, RobotsCheckResult)
        assert result.score == 100
        assert result.status == "pass"
        assert result.sitemap_urls == ["https://example.com/sitemap.xml"]
        assert result.details == "Robots.txt found with 1 sitemap reference(s)"

    @pytest.mark.asyncio
    async def test_user_agent_only(self, fake_web):
        web = fake_web({f"{BASE}/robots.txt": "User-agent: *\nDisallow: /admin"})

        async with web.client() as client:
            result = await ROBOTS_CHECK.run(CONTEXT, client)

        assert result.score == 60
        assert result.status == "warning"
        assert result.sitemap_urls == []
        assert result.recommendation == "Add sitemap reference to robots.txt"

    @pytest.mark.asyncio
    async def test_sitemap_only(self, fake_web):
        web = fake_web({f"{BASE}/robots.txt": "sitemap: https://example.com/a.xml\n"})

        async with web.client() as client:
            result = await ROBOTS_CHECK.run(CONTEXT, client)

        assert result.score == 40
        assert result.status == "warning"

    @pytest.mark.asyncio
    async def test_missing(self, fake_web):
        async with fake_web().client() as client:
            result = await ROBOTS_CHECK.run(CONTEXT, client)

        assert result.score == 0
        assert result.status == "fail"
        assert result.sitemap_urls == []

    @pytest.mark.asyncio
    async def test_timeout_degrades_to_not_found(self, fake_web):
        web = fake_web({f"{BASE}/robots.txt": httpx.ConnectTimeout("timed out")})

        async with web.client() as client:
            result = await ROBOTS_CHECK.run(CONTEXT, client)

        assert result.status == "fail"
        assert result.details == "No robots.txt file found"

    def test_extracts_every_sitemap_directive(self):
        robots = (
            "User-agent: *\r\n"
            "Sitemap: https://example.com/one.xml\r\n"
            "SITEMAP:https://cdn.example.com/two.xml\n"
            "# Sitemap: commented out is not a directive\n"
        )
        assert extract_sitemap_urls(robots) == [
            "https://example.com/one.xml",
            "https://cdn.example.com/two.xml",
        ]


class TestSitemap:
    def test_candidates_put_robots_urls_first_without_duplicates(self):
        candidates = sitemap_candidates(
            BASE, ["https://cdn.example.com/s.xml", f"{BASE}/sitemap.xml"]
        )

        assert candidates == [
            "https://cdn.example.com/s.xml",
            f"{BASE}/sitemap.xml",
            f"{BASE}/sitemap_index.xml",
            f"{BASE}/sitemap-index.xml",
            f"{BASE}/sitemaps/sitemap.xml",
            f"{BASE}/sitemap/sitemap.xml",
        ]

    def test_robots_urls_beyond_limit_are_dropped_and_logged(self, caplog):
        robots_urls = [f"https://cdn.example.com/s{i}.xml" for i in range(12)]

        with caplog.at_level(logging.DEBUG, logger="readiness.file_checks"):
            candidates = sitemap_candidates(BASE, robots_urls)

        assert candidates[:10] == robots_urls[:10]
        assert "https://cdn.example.com/s10.xml" not in candidates
        assert len(candidates) == 15
        assert "Ignoring 2 robots.txt sitemaps" in caplog.text

    def test_content_validation(self):
        assert is_sitemap_content(SITEMAP_XML)
        assert is_sitemap_content("<sitemapindex><sitemap></sitemap></sitemapindex>")
        assert not is_sitemap_content("<!DOCTYPE html><html><url></url></html>")
        assert not is_sitemap_content("plain text")

    @pytest.mark.asyncio
    async def test_robots_url_is_probed_first(self, fake_web):
        robots_url = "https://cdn.example.com/custom-sitemap.xml"
        web = fake_web({robots_url: SITEMAP_XML, f"{BASE}/sitemap.xml": SITEMAP_XML})

        async with web.client() as client:
            result = await SITEMAP_CHECK.run(CONTEXT, client, robots_sitemap_urls=[robots_url])

        assert result.score == 100
        assert result.status == "pass"
        assert result.details == "Valid XML sitemap found (referenced in robots.txt)"
        assert web.requested == [robots_url]

    @pytest.mark.asyncio
    async def test_falls_back_to_common_locations_sequentially(self, fake_web):
        robots_url = "https://example.com/missing.xml"
        web = fake_web(
            {
                f"{BASE}/sitemap.xml": "<!DOCTYPE html><html><body>soft 404</body></html>",
                f"{BASE}/sitemap_index.xml": SITEMAP_XML,
            }
        )

        async with web.client() as client:
            result = await SITEMAP_CHECK.run(CONTEXT, client, robots_sitemap_urls=[robots_url])

        assert result.details == "Valid XML sitemap found at /sitemap_index.xml"
        assert web.requested == [
            robots_url,
            f"{BASE}/sitemap.xml",
            f"{BASE}/sitemap_index.xml",
        ]

    @pytest.mark.asyncio
    async def test_candidate_errors_are_skipped(self, fake_web):
        web = fake_web(
            {
                f"{BASE}/sitemap.xml": httpx.ConnectError("reset"),
                f"{BASE}/sitemap-index.xml": SITEMAP_XML,
            }
        )

        async with web.client() as client:
            result = await SITEMAP_CHECK.run(CONTEXT, client)

        assert result.status == "pass"
        assert result.details.endswith("/sitemap-index.xml")

    @pytest.mark.asyncio
    async def test_nothing_found(self, fake_web):
        web = fake_web()

        async with web.client() as client:
            result = await SITEMAP_CHECK.run(CONTEXT, client)

        assert result.score == 0
        assert result.status == "fail"
        assert result.details == "No sitemap.xml found"
        assert len(web.requested) == 5


class TestRunFileChecks:
    @pytest.mark.asyncio
    async def test_robots_sitemaps_feed_the_sitemap_check(self, fake_web):
        robots_url = "https://example.com/sitemaps/main.xml"
        web = fake_web(
            {
                f"{BASE}/robots.txt": f"User-agent: *\nSitemap: {robots_url}\n",
                robots_url: SITEMAP_XML,
                f"{BASE}/llms.txt": LLMS_TXT,
            }
        )

        async with web.client() as client:
            results = await run_file_checks(CONTEXT, client)

        assert results.robots.score == 100
        assert results.sitemap.details == "Valid XML sitemap found (referenced in robots.txt)"
        assert results.llms.status == "pass"

        # robots.txt is fetched before any sitemap candidate
        assert web.requested.index(f"{BASE}/robots.txt") < web.requested.index(robots_url)
        assert f"{BASE}/sitemap.xml" not in web.requested

    @pytest.mark.asyncio
    async def test_nothing_reachable(self, fake_web):
        async with fake_web().client() as client:
            results = await run_file_checks(CONTEXT, client)

        assert [r.id for r in results] == ["llms-txt", "robots-txt", "sitemap"]
        assert all(r.score == 0 and r.status == "fail" for r in results)

"""Tests for text, URL and fetch helpers."""

import asyncio

import httpx
import pytest

from readiness.exceptions import FetchError, FetchTimeoutError, InvalidUrlError
from readiness.utils import (
    calculate_readability,
    extract_text_content,
    fetch_with_timeout,
    get_base_url,
    get_domain_reputation_bonus,
    get_hostname,
    get_status_from_score,
    normalize_url,
)


class TestNormalizeUrl:
    def test_adds_https_scheme(self):
        assert normalize_url("example.com") == "https://example.com"

    def test_keeps_http_scheme(self):
        assert normalize_url("http://example.com") == "http://example.com"

    def test_keeps_https_url_with_path(self):
        url = "https://example.com/a/b?q=1"
        assert normalize_url(url) == url


class TestGetBaseUrl:
    def test_strips_path_query_and_fragment(self):
        assert get_base_url("https://example.com/docs/page?x=1#top") == "https://example.com"

    def test_keeps_port(self):
        assert get_base_url("http://localhost:8000/path") == "http://localhost:8000"

    def test_scheme_less_input(self):
        assert get_base_url("example.com/about") == "https://example.com"

    def test_invalid_url_raises(self):
        with pytest.raises(InvalidUrlError):
            get_base_url("https://")

    def test_invalid_port_raises(self):
        with pytest.raises(InvalidUrlError):
            get_base_url("https://example.com:notaport/")

    @pytest.mark.parametrize(
        "url", ["not a url", "https://exa mple.com", "https://exa<mple.com", 'https://a"b.com']
    )
    def test_malformed_host_raises(self, url):
        with pytest.raises(InvalidUrlError):
            get_base_url(url)

    def test_malformed_host_rejected_by_get_hostname(self):
        with pytest.raises(InvalidUrlError):
            get_hostname("https://exa mple.com")

    def test_hostname_is_lowercased(self):
        assert get_hostname("https://Docs.Example.COM/x") == "docs.example.com"


class TestExtractTextContent:
    def test_strips_tags(self):
        assert extract_text_content("<p>Hello <b>World</b></p>") == "Hello World"

    def test_removes_scripts_and_styles(self):
        html = (
            "<html><head><STYLE type='text/css'>\nbody { color: red; }\n</STYLE>"
            "<script>\nvar secret = 1;\n</script></head>"
            "<body><p>Visible</p><Script src='x.js'></Script></body></html>"
        )
        text = extract_text_content(html)

        assert text == "Visible"
        assert "secret" not in text
        assert "color" not in text

    def test_decodes_entities(self):
        html = "<p>Fish&nbsp;&amp;&nbsp;Chips &lt;3 &quot;yum&quot; it&#39;s</p>"
        assert extract_text_content(html) == "Fish & Chips <3 \"yum\" it's"

    def test_collapses_whitespace(self):
        assert extract_text_content("  <div>\n\n a \t  b </div>  ") == "a b"


class TestCalculateReadability:
    def test_empty_text_is_zero(self):
        assert calculate_readability("") == 0

    def test_text_without_sentences_is_zero(self):
        assert calculate_readability("!!! ...") == 0

    def test_simple_text_is_capped_at_100(self):
        assert calculate_readability("The cat sat. The dog ran.") == 100

    def test_dense_text_is_floored_at_zero(self):
        text = (
            "Internationalization responsibilities notwithstanding "
            "organizational communication"
        )
        assert calculate_readability(text) == 0

    def test_score_in_range(self):
        text = "Readability formulas estimate difficulty. Shorter sentences help readers."
        assert 0 <= calculate_readability(text) <= 100


class TestDomainReputationBonus:
    def test_documentation_site_wins_over_top_tier(self):
        assert get_domain_reputation_bonus("docs.stripe.com") == 20

    def test_top_tier_domain(self):
        assert get_domain_reputation_bonus("stripe.com") == 18

    def test_top_tier_subdomain_with_www(self):
        assert get_domain_reputation_bonus("www.github.com") == 18
        assert get_domain_reputation_bonus("gist.github.com") == 18

    def test_second_tier_domain(self):
        assert get_domain_reputation_bonus("app.netlify.com") == 12

    def test_api_and_developer_hosts(self):
        assert get_domain_reputation_bonus("api.example.com") == 20
        assert get_domain_reputation_bonus("developer.example.org") == 20

    def test_lookalike_domain_gets_nothing(self):
        assert get_domain_reputation_bonus("notgithub.com") == 0

    def test_unknown_domain(self):
        assert get_domain_reputation_bonus("example.com") == 0


def test_status_from_score():
    assert get_status_from_score(80) == "pass"
    assert get_status_from_score(79.9) == "warning"
    assert get_status_from_score(50) == "warning"
    assert get_status_from_score(49) == "fail"


class TestFetchWithTimeout:
    @pytest.mark.asyncio
    async def test_returns_response_for_any_status(self, fake_web):
        web = fake_web({"https://example.com/robots.txt": "User-agent: *"})

        async with web.client() as client:
            found = await fetch_with_timeout("https://example.com/robots.txt", client=client)
            missing = await fetch_with_timeout("https://example.com/nope", client=client)

        assert found.status_code == 200
        assert found.text == "User-agent: *"
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_slow_response_raises_timeout(self):
        async def slow(request):
            await asyncio.sleep(1)
            return httpx.Response(200, text="late")

        async with httpx.AsyncClient(transport=httpx.MockTransport(slow)) as client:
            with pytest.raises(FetchTimeoutError):
                await fetch_with_timeout("https://example.com/", timeout=0.05, client=client)

    @pytest.mark.asyncio
    async def test_network_error_raises_fetch_error(self, fake_web):
        web = fake_web({"https://example.com/": httpx.ConnectError("refused")})

        async with web.client() as client:
            with pytest.raises(FetchError) as exc_info:
                await fetch_with_timeout("https://example.com/", client=client)

        assert not isinstance(exc_info.value, FetchTimeoutError)
        assert exc_info.value.url == "https://example.com/"

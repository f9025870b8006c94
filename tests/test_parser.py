import pytest
from bs4 import BeautifulSoup

from linkaudit.parser import extract_all_links, extract_links, extract_tracked_links, get_meta


SAMPLE_HTML = """
<!DOCTYPE html>
<html lang="en">
<head>
    <title>Product docs</title>
    <meta name="description" content="  Everything about the product.  ">
    <meta property="og:title" content="Product docs">
</head>
<body>
    <a href="/about">About</a>
    <a href="https://example.com/about">About (absolute)</a>
    <a href="#top">Back to top</a>
    <a href="JavaScript:void(0)">Menu</a>
    <a href="mailto:support@example.com">Mail us</a>
    <a href="https://aka.ms/product-docs">Docs</a>
    <a href="https://query.prod.cms.example.net/page?id=7">Query</a>
    <a href="https://aka.ms/product-docs">Docs again</a>
    <a href="https://other.org">Elsewhere</a>
    <a href="http://[::1">Broken markup</a>
    <a>No href</a>
    <a href="">Empty</a>
</body>
</html>
"""

BASE_URL = "https://example.com/index.html"


# --- unrestricted policy ---

def test_all_links_in_document_order():
    assert extract_all_links(SAMPLE_HTML, BASE_URL) == [
        "https://example.com/about",
        "https://aka.ms/product-docs",
        "https://query.prod.cms.example.net/page?id=7",
        "https://other.org/",
    ]


def test_relative_and_absolute_duplicates_collapse():
    links = extract_all_links(SAMPLE_HTML, BASE_URL)
    assert links.count("https://example.com/about") == 1


def test_fragment_and_script_hrefs_skipped():
    links = extract_all_links(SAMPLE_HTML, BASE_URL)
    assert not any("#top" in link or "void" in link for link in links)


def test_non_http_schemes_dropped():
    links = extract_all_links(SAMPLE_HTML, BASE_URL)
    assert not any(link.startswith("mailto:") for link in links)


def test_relative_href_resolved_against_base():
    html = '<a href="next">Next</a><a href="../up">Up</a>'
    assert extract_all_links(html, "https://example.com/blog/post") == [
        "https://example.com/blog/next",
        "https://example.com/up",
    ]


def test_fragment_on_real_page_kept():
    html = '<a href="/guide#install">Install</a>'
    assert extract_all_links(html, BASE_URL) == ["https://example.com/guide#install"]


def test_empty_html_does_not_crash():
    assert extract_all_links("", BASE_URL) == []


# --- allowlist policy ---

def test_tracked_links_only():
    assert extract_tracked_links(SAMPLE_HTML, BASE_URL) == [
        "https://aka.ms/product-docs",
        "https://query.prod.cms.example.net/page?id=7",
    ]


def test_custom_allowlist():
    assert extract_links(SAMPLE_HTML, BASE_URL, allowlist=["other.org"]) == ["https://other.org/"]


def test_allowlist_matching_nothing():
    assert extract_tracked_links(SAMPLE_HTML, BASE_URL, domains=("nowhere.test",)) == []


def test_malformed_href_does_not_abort_extraction():
    html = '<a href="http://[::1">bad</a><a href="https://aka.ms/after">ok</a>'
    assert extract_tracked_links(html, BASE_URL) == ["https://aka.ms/after"]


# --- get_meta ---

@pytest.fixture
def soup():
    return BeautifulSoup(SAMPLE_HTML, "lxml")


def test_meta_by_name_is_stripped(soup):
    assert get_meta(soup, name="description") == "Everything about the product."


def test_meta_by_property(soup):
    assert get_meta(soup, prop="og:title") == "Product docs"


def test_missing_meta_is_none(soup):
    assert get_meta(soup, name="keywords") is None

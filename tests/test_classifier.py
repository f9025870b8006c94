import pytest

from linkaudit.classifier import STATUS_CLASSES, classify_status, count_red_links, count_tracked_redirects, is_broken
from linkaudit.models import LinkRecord, SeedResult


# --- helpers ---
def record(url, status=200, error=None, destination=None):
    destination = destination or url
    return LinkRecord(
        original_url=url,
        destination_url=destination,
        status_code=status,
        error=error,
        redirected=destination != url,
    )


def rt_result(records, status="success"):
    result = SeedResult.empty("https://example.com/", "rt", status=status)
    result.fetched_urls = [r.original_url for r in records]
    result.destination_urls = records
    return result


# --- is_broken ---

@pytest.mark.parametrize("status, error, broken", [
    (200, None, False),
    (301, None, False),
    (404, "Not Found", True),
    (500, "Server Error", True),
    (0, "Network error or CORS restriction", True),
    (0, None, True),
    (200, "odd but reported", True),
    (408, "Request timed out", True),
])
def test_is_broken(status, error, broken):
    assert is_broken(record("https://example.com/x", status, error)) is broken


# --- classify_status ---

@pytest.mark.parametrize("status, expected", [
    (200, "success"),
    (302, "redirect"),
    (403, "client_error"),
    (404, "not_found"),
    (503, "server_error"),
    (0, "connection_error"),
    (None, "connection_error"),
])
def test_classify_status(status, expected):
    assert classify_status(status) == expected
    assert expected in STATUS_CLASSES


# --- count_tracked_redirects ---

def test_shortlink_landing_on_target_counted():
    results = [rt_result([
        record("https://aka.ms/a", destination="https://query.prod.example.net/a"),
        record("https://aka.ms/b", destination="https://learn.example.com/b"),
        record("https://query.prod.example.net/direct"),
    ])]
    assert count_tracked_redirects(results) == {"shortlink_to_target": 1, "direct_target": 1}


def test_custom_domains():
    results = [rt_result([record("https://go.example/x", destination="https://land.example/x")])]
    counts = count_tracked_redirects(results, shortlink_domain="go.example", target_domain="land.example")
    assert counts == {"shortlink_to_target": 1, "direct_target": 0}


def test_failed_seeds_ignored_by_redirect_counts():
    failed = SeedResult.failed("https://down.example.com/", "rt", "Request timed out", status_code=408)
    assert count_tracked_redirects([failed]) == {"shortlink_to_target": 0, "direct_target": 0}


# --- count_red_links ---

def test_red_links_across_modes():
    broken = SeedResult.empty("https://example.com/", "broken")
    broken.total_links = 4
    broken.broken_links = [record("https://example.com/a", 404, "Not Found")]
    results = [
        rt_result([record("https://aka.ms/ok"), record("https://aka.ms/bad", 0, "Request timed out")]),
        broken,
        SeedResult.failed("https://down.example.com/", "rt", "HTTP error! status: 502", status_code=502),
    ]
    assert count_red_links(results) == 3


def test_no_results_no_red_links():
    assert count_red_links([]) == 0

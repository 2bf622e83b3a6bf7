import json
import urllib.error
from unittest.mock import patch

import pytest

from crossbench.gist import API_URL, GistError, GistManager


class _FakeResponse:
    def __init__(self, body: bytes) -> None:
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def _answer(document, calls):
    body = document if isinstance(document, bytes) else json.dumps(document).encode()

    def fake(request, timeout=None):
        calls.append(request)
        return _FakeResponse(body)

    return fake


@pytest.fixture
def results_file(tmp_path):
    path = tmp_path / "benchmark_results.md"
    path.write_text('# Benchmark Results\n\n| "quoted" | 1 ms |\n', encoding="utf-8")
    return path


def test_build_payload_carries_file_content(results_file):
    manager = GistManager(filename=results_file)
    payload = manager.build_payload("Cross-Platform Benchmark Results")
    restored = json.loads(json.dumps(payload))
    assert restored["description"] == "Cross-Platform Benchmark Results"
    assert restored["public"] is True
    assert restored["files"]["benchmark_results.md"]["content"] == results_file.read_text(
        encoding="utf-8"
    )


def test_build_payload_missing_file(tmp_path):
    manager = GistManager(filename=tmp_path / "benchmark_results.md")
    with pytest.raises(GistError, match="not found"):
        manager.build_payload()


def test_upload_missing_file_makes_no_request(tmp_path):
    calls = []
    manager = GistManager(filename=tmp_path / "benchmark_results.md")
    with patch("urllib.request.urlopen", side_effect=_answer({}, calls)):
        with pytest.raises(GistError, match="not found"):
            manager.upload_to_gist()
    assert calls == []


def test_update_requires_token(results_file):
    calls = []
    manager = GistManager("abc123", "", results_file)
    with patch("urllib.request.urlopen", side_effect=_answer({}, calls)):
        with pytest.raises(GistError, match="token required"):
            manager.upload_to_gist()
    assert calls == []


def test_anonymous_create(results_file):
    calls = []
    response = {"html_url": "https://gist.example.com/abc123", "id": "abc123"}
    manager = GistManager(filename=results_file)
    with patch("urllib.request.urlopen", side_effect=_answer(response, calls)):
        url = manager.upload_to_gist("Cross-Platform Benchmark Results")
    assert url == "https://gist.example.com/abc123"
    assert manager.gist_id == "abc123"
    (request,) = calls
    assert request.full_url == API_URL
    assert request.get_method() == "POST"
    assert request.get_header("Authorization") is None
    assert request.get_header("Content-type") == "application/json"
    sent = json.loads(request.data)
    assert sent == manager.build_payload("Cross-Platform Benchmark Results")


def test_authenticated_create_sends_token(results_file):
    calls = []
    response = {"html_url": "https://gist.example.com/abc123", "id": "abc123"}
    manager = GistManager("", "token", results_file)
    with patch("urllib.request.urlopen", side_effect=_answer(response, calls)):
        url = manager.upload_to_gist()
    assert url == "https://gist.example.com/abc123"
    assert manager.gist_id == "abc123"
    assert calls[0].get_header("Authorization") == "token token"
    assert calls[0].get_method() == "POST"
    assert calls[0].full_url == API_URL


def test_update_existing_gist(results_file):
    calls = []
    response = {"html_url": "https://gist.example.com/abc123", "id": "other"}
    manager = GistManager("abc123", "token", results_file)
    with patch("urllib.request.urlopen", side_effect=_answer(response, calls)):
        url = manager.upload_to_gist()
    assert url == "https://gist.example.com/abc123"
    assert manager.gist_id == "abc123"
    assert calls[0].full_url == f"{API_URL}/abc123"
    assert calls[0].get_method() == "PATCH"


def test_upload_network_failure(results_file):
    manager = GistManager(filename=results_file)
    with patch("urllib.request.urlopen", side_effect=urllib.error.URLError("down")):
        with pytest.raises(GistError, match="Failed to upload"):
            manager.upload_to_gist()
    assert manager.gist_id == ""


def test_upload_response_without_url(results_file):
    calls = []
    manager = GistManager(filename=results_file)
    with patch("urllib.request.urlopen", side_effect=_answer({"id": "abc123"}, calls)):
        with pytest.raises(GistError, match="Failed to upload"):
            manager.upload_to_gist()
    assert manager.gist_id == ""


def test_upload_non_json_response(results_file):
    calls = []
    manager = GistManager(filename=results_file)
    with patch("urllib.request.urlopen", side_effect=_answer(b"<html>", calls)):
        with pytest.raises(GistError):
            manager.upload_to_gist()
    assert len(calls) == 1


def test_download_without_id(tmp_path):
    calls = []
    manager = GistManager(filename=tmp_path / "benchmark_results.md")
    with patch("urllib.request.urlopen", side_effect=_answer({}, calls)):
        assert manager.download_existing_gist() is False
    assert calls == []
    assert not (tmp_path / "benchmark_results.md").exists()


def test_download_writes_first_file(tmp_path):
    calls = []
    target = tmp_path / "benchmark_results.md"
    document = {
        "files": {
            "benchmark_results.md": {"content": "# Benchmark Results"},
            "other.md": {"content": "ignored"},
        }
    }
    manager = GistManager("abc123", "", target)
    with patch("urllib.request.urlopen", side_effect=_answer(document, calls)):
        assert manager.download_existing_gist() is True
    assert target.read_text(encoding="utf-8") == "# Benchmark Results\n"
    assert calls[0].full_url == f"{API_URL}/abc123"
    assert calls[0].get_method() == "GET"


def test_download_empty_content(tmp_path):
    calls = []
    target = tmp_path / "benchmark_results.md"
    document = {"files": {"benchmark_results.md": {"content": ""}}}
    manager = GistManager("abc123", "", target)
    with patch("urllib.request.urlopen", side_effect=_answer(document, calls)):
        assert manager.download_existing_gist() is False
    assert not target.exists()


def test_download_failure_keeps_local_file(results_file):
    before = results_file.read_text(encoding="utf-8")
    manager = GistManager("abc123", "", results_file)
    with patch("urllib.request.urlopen", side_effect=urllib.error.URLError("down")):
        assert manager.download_existing_gist() is False
    assert results_file.read_text(encoding="utf-8") == before
"""Download and upload the results file as a GitHub Gist."""

from __future__ import annotations

import json
import os
import urllib.error
import urllib.request
from pathlib import Path
from typing import Any

from crossbench.logger import DEFAULT_RESULTS_FILE

API_URL = "https://api.github.com/gists"
DEFAULT_DESCRIPTION = "Benchmark Results"
_TIMEOUT = 30.0
_UPLOAD_FAILED = (
    "Failed to upload to Gist. Check your internet connection and credentials."
)


class GistError(Exception):
    """A Gist could not be uploaded."""


def _first_file_content(document: dict[str, Any]) -> str | None:
    files = document.get("files")
    if not isinstance(files, dict) or not files:
        return None
    first = next(iter(files.values()))
    if not isinstance(first, dict):
        return None
    content = first.get("content")
    return content if isinstance(content, str) else None


def _banner(*lines: str) -> None:
    rule = "=" * 50
    print(f"\n{rule}")
    for line in lines:
        print(line)
    print(rule)


class GistManager:
    """Keeps a local results file in step with a GitHub Gist."""

    def __init__(
        self,
        gist_id: str = "",
        github_token: str = "",
        filename: str | os.PathLike[str] = DEFAULT_RESULTS_FILE,
    ) -> None:
        self.gist_id = gist_id
        self.github_token = github_token
        self.filename = Path(filename)

    def _request(
        self,
        url: str,
        method: str = "GET",
        payload: dict[str, Any] | None = None,
        authorize: bool = True,
    ) -> dict[str, Any]:
        headers = {"Accept": "application/vnd.github+json"}
        data = None
        if payload is not None:
            data = json.dumps(payload).encode("utf-8")
            headers["Content-Type"] = "application/json"
        if authorize and self.github_token:
            headers["Authorization"] = f"token {self.github_token}"
        request = urllib.request.Request(url, data=data, headers=headers, method=method)
        try:
            with urllib.request.urlopen(request, timeout=_TIMEOUT) as response:
                body = response.read()
        except (urllib.error.URLError, OSError) as error:
            raise GistError(str(error)) from error
        try:
            document = json.loads(body)
        except ValueError as error:
            raise GistError("response is not JSON") from error
        if not isinstance(document, dict):
            raise GistError("unexpected response")
        return document

    def build_payload(self, description: str = DEFAULT_DESCRIPTION) -> dict[str, Any]:
        """The JSON document that creates or updates the Gist."""
        try:
            content = self.filename.read_text(encoding="utf-8")
        except FileNotFoundError as error:
            raise GistError(f"{self.filename} not found!") from error
        return {
            "description": description,
            "public": True,
            "files": {self.filename.name: {"content": content}},
        }

    def download_existing_gist(self) -> bool:
        """Replace the local file with the Gist's first file; True on success."""
        if not self.gist_id:
            print("No Gist ID provided, creating new local file.")
            return False

        print("Downloading existing Gist...")
        try:
            document = self._request(f"{API_URL}/{self.gist_id}", authorize=False)
            content = _first_file_content(document)
            if content:
                self.filename.write_text(content + "\n", encoding="utf-8")
                print("Successfully downloaded existing results.")
                return True
        except (GistError, OSError):
            pass

        print("Could not download existing Gist or it was empty.")
        return False

    def upload_to_gist(self, description: str = DEFAULT_DESCRIPTION) -> str:
        """Create or update the Gist and return its web address.

        A new Gist's id is kept in ``gist_id``. Raises GistError on failure.
        """
        if not self.filename.is_file():
            raise GistError(f"{self.filename} not found!")
        payload = self.build_payload(description)

        if self.gist_id:
            if not self.github_token:
                raise GistError("GitHub token required to update existing Gist!")
            url, method = f"{API_URL}/{self.gist_id}", "PATCH"
        else:
            url, method = API_URL, "POST"

        print("Uploading to GitHub Gist...")
        try:
            document = self._request(url, method, payload)
        except GistError as error:
            raise GistError(_UPLOAD_FAILED) from error

        html_url = document.get("html_url")
        if not isinstance(html_url, str) or not html_url:
            raise GistError(_UPLOAD_FAILED)
        print(f"Successfully uploaded to: {html_url}")

        if not self.gist_id:
            new_id = document.get("id")
            if isinstance(new_id, str) and new_id:
                self.gist_id = new_id
                _banner(
                    f"★ IMPORTANT: New Gist ID: {new_id}",
                    "★ Save this ID for future updates on other machines!",
                )
        return html_url
"""Loading of ffuf scan output from a file or a URL."""

from __future__ import annotations

import logging
from pathlib import Path

import requests

from ffuftree.models import ScanSourceError

logger = logging.getLogger(__name__)


def is_remote(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def load_scan_output(location: str, timeout: int = 30) -> str:
    """Return the raw text of the scan output at *location*.

    *location* is either a filesystem path or an ``http(s)://`` URL.
    """
    if is_remote(location):
        return _fetch(location, timeout)

    path = Path(location)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ScanSourceError(f"error reading file {location}: {exc}") from exc
    logger.debug("Read %d bytes from %s", len(text), path)
    return text


def _fetch(url: str, timeout: int) -> str:
    try:
        resp = requests.get(
            url,
            headers={"User-Agent": "ffuftree/1.0"},
            timeout=timeout,
        )
    except requests.RequestException as exc:
        raise ScanSourceError(f"error fetching {url}: {exc}") from exc

    if resp.status_code == 404:
        raise ScanSourceError(f"scan output not found: {url}")
    if not resp.ok:
        raise ScanSourceError(
            f"error fetching {url}: HTTP {resp.status_code}"
        )
    logger.debug("Fetched %d bytes from %s", len(resp.content), url)
    return resp.text

"""Data classes and errors for ffuftree."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from math import isfinite


class FfufTreeError(Exception):
    """Base class for ffuftree errors."""


class ScanSourceError(FfufTreeError):
    """Raised when the scan output cannot be read or fetched."""


class ScanFormatError(FfufTreeError):
    """Raised when the scan output is not a valid ffuf JSON document."""


class StatusClass(Enum):
    SUCCESS = "green"
    REDIRECT = "yellow"
    CLIENT_ERROR = "red"
    SERVER_ERROR = "magenta"
    OTHER = None

    @property
    def color(self) -> str | None:
        return self.value


_STATUS_CLASSES: dict[int, StatusClass] = {
    2: StatusClass.SUCCESS,
    3: StatusClass.REDIRECT,
    4: StatusClass.CLIENT_ERROR,
    5: StatusClass.SERVER_ERROR,
}


def classify_status(status: int | str | None) -> StatusClass:
    """Map an HTTP status (int or numeric string) to its StatusClass."""
    if isinstance(status, bool) or status is None:
        return StatusClass.OTHER
    try:
        code = int(status)
    except (TypeError, ValueError):
        return StatusClass.OTHER
    if not 100 <= code <= 599:
        return StatusClass.OTHER
    return _STATUS_CLASSES.get(code // 100, StatusClass.OTHER)


def _as_int(value: object) -> int:
    # JSON numbers decode to int or float; anything else counts as zero
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not isfinite(value):
        return 0
    return int(value)


@dataclass(frozen=True)
class ScanRecord:
    url: str
    host: str | None = None
    status: int = 0
    length: int = 0

    @classmethod
    def from_result(cls, raw: object) -> ScanRecord | None:
        """Build a record from one ffuf result, or None if it has no usable url."""
        if not isinstance(raw, Mapping):
            return None
        url = raw.get("url")
        if not isinstance(url, str):
            return None
        host = raw.get("host")
        return cls(
            url=url,
            host=host if isinstance(host, str) else None,
            status=_as_int(raw.get("status")),
            length=_as_int(raw.get("length")),
        )


@dataclass(frozen=True)
class LeafAnnotation:
    status: str
    length: str

    @property
    def status_class(self) -> StatusClass:
        return classify_status(self.status)


@dataclass
class TreeNode:
    children: dict[str, TreeNode] = field(default_factory=dict)
    leaf: LeafAnnotation | None = None

    def child(self, name: str) -> TreeNode:
        """Return the child called *name*, creating it if absent."""
        node = self.children.get(name)
        if node is None:
            node = self.children[name] = TreeNode()
        return node


@dataclass
class RenderOptions:
    by_host: bool = False
    color: bool = True
    indent: str = "    "

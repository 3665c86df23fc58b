"""Fold flat ffuf results into a directory tree."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping

from ffuftree.models import LeafAnnotation, ScanFormatError, ScanRecord, TreeNode

logger = logging.getLogger(__name__)

SECURE_PREFIX = "https://"


def _reject_constant(name: str) -> float:
    raise ValueError(f"invalid number literal {name}")


class TreeBuilder:
    """Builds one tree of discovered paths.

    In host-keyed mode the root's children are hosts, each holding the path
    tree discovered on that host. Records that cannot be placed in the tree
    (wrong shape, plain ``http://``, no host in host-keyed mode) are dropped
    without notice.
    """

    def __init__(self, by_host: bool = False):
        self.by_host = by_host
        self.root = TreeNode()

    def build(self, raw: str | bytes) -> TreeNode:
        """Decode an ffuf JSON document and fold its results into the tree."""
        try:
            data = json.loads(raw, parse_constant=_reject_constant)
        except ValueError as exc:
            raise ScanFormatError(f"invalid JSON data: {exc}") from exc
        self.add_results(data)
        return self.root

    def add_results(self, data: object) -> None:
        if not isinstance(data, Mapping):
            raise ScanFormatError("invalid ffuf output format")
        results = data.get("results")
        if not isinstance(results, list):
            raise ScanFormatError("invalid ffuf output format")

        logger.debug("Folding %d results (by_host=%s)", len(results), self.by_host)
        for result in results:
            record = ScanRecord.from_result(result)
            if record is not None:
                self.add_record(record)

    def add_record(self, record: ScanRecord) -> None:
        if not record.url.startswith(SECURE_PREFIX):
            return

        node = self.root
        if self.by_host:
            if record.host is None:
                return
            node = node.child(record.host)

        # Drop scheme, the empty field after it, and host:port
        parts = record.url.split("/")[3:]
        if not parts:
            return

        for part in parts[:-1]:
            node = node.child(part)
        node.child(parts[-1]).leaf = LeafAnnotation(
            status=str(record.status),
            length=str(record.length),
        )


def build_tree(raw: str | bytes, by_host: bool = False) -> TreeNode:
    """Build a tree from an ffuf JSON document.

    Example: a result for ``https://example.com/admin/login`` with status 200
    and length 1234 becomes::

        └── admin
            └── login (Status: 200), (Length: 1234)
    """
    return TreeBuilder(by_host=by_host).build(raw)

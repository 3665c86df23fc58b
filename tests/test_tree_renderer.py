"""Tests for tree_renderer module."""

import io
import json
import random

from rich.console import Console

from ffuftree.models import LeafAnnotation, RenderOptions, StatusClass, TreeNode
from ffuftree.tree_builder import build_tree
from ffuftree.tree_renderer import iter_lines, print_tree, render_tree


def _scan(*urls_and_status) -> str:
    return json.dumps({
        "results": [
            {"url": url, "status": status, "length": 10}
            for url, status in urls_and_status
        ]
    })


class TestRenderTree:
    def test_empty(self):
        assert render_tree(TreeNode()) == ""

    def test_nested_annotated_leaf(self):
        tree = build_tree(json.dumps({
            "results": [{"url": "https://a.b/x/y", "status": 201, "length": 42}]
        }))
        assert render_tree(tree).split("\n") == [
            "└── x",
            "    └── y (Status: 201), (Length: 42)",
        ]

    def test_last_child_glyph(self):
        tree = build_tree(_scan(
            ("https://a.b/z", 200),
            ("https://a.b/a", 200),
            ("https://a.b/m", 200),
        ))
        lines = render_tree(tree).split("\n")
        assert lines[0].startswith("├── a")
        assert lines[1].startswith("├── m")
        assert lines[2].startswith("└── z")

    def test_sorted_by_code_point(self):
        tree = build_tree(_scan(
            ("https://a.b/b", 200),
            ("https://a.b/B", 200),
            ("https://a.b/_a", 200),
        ))
        names = [line.split(" ")[1] for line in render_tree(tree).split("\n")]
        assert names == ["B", "_a", "b"]

    def test_indent_is_repeated_per_depth(self):
        tree = build_tree(_scan(("https://a.b/a/b/c/d", 200)))
        assert render_tree(tree).split("\n") == [
            "└── a",
            "    └── b",
            "        └── c",
            "            └── d (Status: 200), (Length: 10)",
        ]

    def test_custom_indent(self):
        tree = build_tree(_scan(("https://a.b/a/b", 200)))
        assert render_tree(tree, indent="  ").split("\n")[1] == "  └── b (Status: 200), (Length: 10)"

    def test_annotated_directory_emits_status_once(self):
        tree = build_tree(_scan(
            ("https://a.b/x", 301),
            ("https://a.b/x/y", 200),
        ))
        result = render_tree(tree)
        assert result.count("Status: 301") == 1
        assert result.split("\n") == [
            "└── x (Status: 301), (Length: 10)",
            "    └── y (Status: 200), (Length: 10)",
        ]

    def test_shared_prefix_rendered_once(self):
        tree = build_tree(_scan(
            ("https://a.b/api/v1/users", 200),
            ("https://a.b/api/v1/orders", 401),
            ("https://a.b/api/v2", 404),
        ))
        lines = render_tree(tree).split("\n")
        assert sum(1 for line in lines if line.endswith("── api")) == 1
        assert sum(1 for line in lines if line.endswith("── v1")) == 1

    def test_order_independent(self):
        entries = [
            ("https://a.b/admin/login", 200),
            ("https://a.b/admin", 301),
            ("https://a.b/backup.zip", 200),
            ("https://a.b/api/v1/users", 403),
            ("https://a.b/.git/HEAD", 200),
            ("https://a.b/api/v1", 500),
        ]
        expected = render_tree(build_tree(_scan(*entries)))
        rng = random.Random(1234)
        for _ in range(5):
            shuffled = entries[:]
            rng.shuffle(shuffled)
            assert render_tree(build_tree(_scan(*shuffled))) == expected

    def test_rendering_does_not_mutate(self):
        tree = build_tree(_scan(("https://a.b/x", 200), ("https://a.b/x/y", 200)))
        first = render_tree(tree)
        assert render_tree(tree) == first

    def test_host_keyed_tree(self):
        tree = build_tree(
            json.dumps({"results": [
                {"url": "https://a.b/x", "host": "a.b", "status": 200, "length": 1},
                {"url": "https://c.d/x", "host": "c.d", "status": 200, "length": 1},
            ]}),
            by_host=True,
        )
        assert render_tree(tree).split("\n") == [
            "├── a.b",
            "    └── x (Status: 200), (Length: 1)",
            "└── c.d",
            "    └── x (Status: 200), (Length: 1)",
        ]


class TestDeepPaths:
    def test_path_deeper_than_recursion_limit(self):
        depth = 1500
        tree = build_tree(_scan(("https://a.b/" + "/".join(["d"] * depth), 200)))
        lines = render_tree(tree).split("\n")
        assert len(lines) == depth
        assert lines[-1] == "    " * (depth - 1) + "└── d (Status: 200), (Length: 10)"

    def test_siblings_follow_deep_branch(self):
        tree = build_tree(_scan(
            ("https://a.b/a/" + "/".join(["d"] * 1200), 200),
            ("https://a.b/b", 404),
        ))
        lines = render_tree(tree).split("\n")
        assert lines[0] == "├── a"
        assert lines[-1] == "└── b (Status: 404), (Length: 10)"


class TestIterLines:
    def test_status_class_on_leaves_only(self):
        tree = TreeNode()
        tree.child("dir").child("page").leaf = LeafAnnotation("404", "0")
        lines = list(iter_lines(tree))
        assert lines[0].status_class is StatusClass.OTHER
        assert lines[0].leaf is None
        assert lines[1].status_class is StatusClass.CLIENT_ERROR


class TestPrintTree:
    def _console(self, **kwargs) -> tuple[Console, io.StringIO]:
        buf = io.StringIO()
        return Console(file=buf, width=20, **kwargs), buf

    def test_plain_output_matches_render(self):
        tree = build_tree(_scan(("https://a.b/some/rather/long/path/segment", 200)))
        console, buf = self._console(force_terminal=False)
        print_tree(tree, console, RenderOptions(color=False))
        assert buf.getvalue() == render_tree(tree) + "\n"

    def test_brackets_not_treated_as_markup(self):
        tree = build_tree(_scan(("https://a.b/[bold]x", 200)))
        console, buf = self._console(force_terminal=False)
        print_tree(tree, console)
        assert "[bold]x" in buf.getvalue()

    def test_colored_output(self):
        tree = build_tree(_scan(("https://a.b/ok", 200), ("https://a.b/gone", 404)))
        console, buf = self._console(force_terminal=True, color_system="standard")
        print_tree(tree, console, RenderOptions(color=True))
        output = buf.getvalue()
        assert "\x1b[31m" in output  # red for 404
        assert "\x1b[32m" in output  # green for 200

    def test_color_disabled(self):
        tree = build_tree(_scan(("https://a.b/gone", 404)))
        console, buf = self._console(force_terminal=True, color_system="standard")
        print_tree(tree, console, RenderOptions(color=False))
        assert "\x1b[" not in buf.getvalue()

"""Streamlit viewer for ffuftree."""

from __future__ import annotations

from collections import Counter

import streamlit as st

from ffuftree.models import FfufTreeError, StatusClass, TreeNode
from ffuftree.source import load_scan_output
from ffuftree.tree_builder import build_tree
from ffuftree.tree_renderer import iter_lines

_STATUS_LABELS: dict[StatusClass, str] = {
    StatusClass.SUCCESS: "2xx",
    StatusClass.REDIRECT: "3xx",
    StatusClass.CLIENT_ERROR: "4xx",
    StatusClass.SERVER_ERROR: "5xx",
    StatusClass.OTHER: "other",
}

_PREVIEW_MAX_LINES = 1000


def _qp(key: str, default: str = "") -> str:
    """Read a query parameter, returning *default* if absent."""
    params = st.query_params
    return params.get(key, default)


def main() -> None:
    st.set_page_config(
        page_title="ffuftree",
        page_icon="🌳",
        layout="wide",
    )

    # Hide Streamlit's default toolbar (Deploy, Stop, etc.)
    st.markdown(
        "<style>[data-testid='stToolbar'] { display: none; }</style>",
        unsafe_allow_html=True,
    )

    st.title("ffuftree")
    st.caption("Show ffuf JSON results as a tree of discovered paths.")

    uploaded = st.file_uploader("ffuf output (JSON)", type=["json"])
    url = st.text_input(
        "...or URL of the ffuf output",
        value=_qp("url"),
        placeholder="https://example.com/scans/ffuf.json",
    )
    by_host = st.checkbox(
        "Group by host",
        value=_qp("by_host") in ("1", "true"),
        help="Start one subtree per scanned host instead of merging all paths.",
    )

    render_clicked = st.button("Render", type="primary", use_container_width=True)

    if render_clicked and (uploaded is not None or url):
        _run_render(uploaded.getvalue() if uploaded is not None else None, url, by_host)
    elif render_clicked:
        st.error("Please upload a file or enter a URL.")

    # Show previous result after rerun (e.g. download button click)
    if not render_clicked and "result" in st.session_state:
        _show_result(st.session_state["result"])


def _run_render(data: bytes | None, url: str, by_host: bool) -> None:
    try:
        if data is None:
            with st.spinner("Fetching scan output..."):
                data = load_scan_output(url.strip())
        tree = build_tree(data, by_host=by_host)
    except FfufTreeError as exc:
        st.error(str(exc))
        return

    if not tree.children:
        st.warning("No https:// results found in the scan output.")
        return

    st.session_state["result"] = _summarize(tree)
    _show_result(st.session_state["result"])


def _summarize(tree: TreeNode) -> dict:
    lines = list(iter_lines(tree))
    counts = Counter(
        line.status_class for line in lines if line.leaf is not None
    )
    return {
        "text": "\n".join(line.text for line in lines),
        "counts": {label: counts.get(cls, 0) for cls, label in _STATUS_LABELS.items()},
    }


def _show_result(result: dict) -> None:
    """Display the status summary, download button and tree preview."""
    columns = st.columns(len(result["counts"]))
    for column, (label, count) in zip(columns, result["counts"].items()):
        column.metric(label, count)

    st.download_button(
        label="Download tree",
        data=result["text"],
        file_name="ffuftree.txt",
        mime="text/plain",
        use_container_width=True,
    )

    preview_lines = result["text"].split("\n")
    with st.expander("Tree", expanded=True):
        if len(preview_lines) > _PREVIEW_MAX_LINES:
            st.code("\n".join(preview_lines[:_PREVIEW_MAX_LINES]), language=None)
            st.caption(
                f"Preview is truncated to {_PREVIEW_MAX_LINES:,} lines "
                f"(total {len(preview_lines):,} lines). "
                "Download the file for the full tree."
            )
        else:
            st.code(result["text"], language=None)


if __name__ == "__main__":
    main()

"""``ffuftree-viewer``: serve the Streamlit viewer and open it in a browser."""

from __future__ import annotations

import logging
import threading
import time
import webbrowser
from pathlib import Path

import click
import requests

logger = logging.getLogger(__name__)

APP_PATH = Path(__file__).with_name("app.py")
HEALTH_PATH = "/_stcore/health"


def open_when_ready(base_url: str, attempts: int = 30, delay: float = 1.0) -> bool:
    """Poll the server health endpoint and open *base_url* once it answers.

    Returns False if the server never became ready.
    """
    for _ in range(attempts):
        try:
            resp = requests.get(f"{base_url}{HEALTH_PATH}", timeout=2)
        except requests.RequestException:
            resp = None
        if resp is not None and resp.ok:
            webbrowser.open(base_url)
            return True
        time.sleep(delay)
    logger.warning("Viewer at %s did not come up; open it manually", base_url)
    return False


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--port", "-p", default=8501, show_default=True, help="Port to serve the viewer on.")
@click.option("--no-browser", is_flag=True, help="Don't open a browser tab.")
def main(port, no_browser):
    """Serve the ffuftree viewer locally."""
    from streamlit.web import bootstrap

    if not no_browser:
        threading.Thread(
            target=open_when_ready,
            args=(f"http://localhost:{port}",),
            daemon=True,
        ).start()

    bootstrap.run(
        str(APP_PATH),
        False,
        [],
        {
            "server.headless": True,
            "server.port": port,
            "browser.gatherUsageStats": False,
        },
    )


if __name__ == "__main__":
    main()

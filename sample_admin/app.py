from __future__ import annotations

import json
import logging
from typing import Any

import requests
from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from sample_admin.client import API_URL, fetch_users
from sample_config.settings import get_config
from sample_logger.logging import LoggerConfig, create_logger
from sample_types.errors import ConfigError, UpstreamError

SERVICE_NAME = "admin"
TITLE = "Admin Dashboard"

logger = logging.getLogger(f"sample.{SERVICE_NAME}")


class Dashboard:
    """Single view: fetch the user list once, then dump it as JSON."""

    def __init__(self, session: requests.Session, *, url: str = API_URL) -> None:
        self._session = session
        self._url = url
        self._mounted = False
        self.users: list[dict[str, Any]] = []
        self.error: str | None = None

    def mount(self) -> None:
        """Issue the one GET this view ever makes; later calls do nothing."""

        if self._mounted:
            return
        self._mounted = True

        try:
            self.users = fetch_users(self._session, url=self._url)
        except UpstreamError as exc:
            logger.warning("Failed to load users: %s", exc.message, extra={"details": exc.details})
            self.error = exc.message

    @property
    def text(self) -> str:
        return json.dumps(self.users, indent=2)

    def render(self) -> Panel:
        body: list[Text] = [Text(self.text)]
        if self.error:
            body.append(Text(f"Error: {self.error}", style="bold red"))
        return Panel(Group(*body), title=TITLE, title_align="left")


def main() -> None:
    # Only the log level matters here; a bad API setting (PORT, CORS_*) must not stop the view.
    config_error: ConfigError | None = None
    try:
        log_level = get_config().log_level
    except ConfigError as exc:
        log_level = "info"
        config_error = exc
    create_logger(LoggerConfig(level=log_level, service=SERVICE_NAME))
    if config_error is not None:
        logger.warning("Ignoring invalid configuration: %s", config_error.message)

    console = Console()
    with requests.Session() as session:
        dashboard = Dashboard(session)
        dashboard.mount()
    console.print(dashboard.render())

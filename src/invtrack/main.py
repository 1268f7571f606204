from __future__ import annotations

import logging

from invtrack.application.container import build_container
from invtrack.config import get_api_settings, get_app_paths
from invtrack.logging_config import setup_logging
from invtrack.ui.app import App


def main() -> None:
    paths = get_app_paths()
    setup_logging(paths.logs_dir, level=logging.INFO)

    settings = get_api_settings()
    logging.getLogger(__name__).info("app_start api=%s", settings.base_url)

    container = build_container(paths, settings)
    app = App(container)
    app.mainloop()


if __name__ == "__main__":
    main()

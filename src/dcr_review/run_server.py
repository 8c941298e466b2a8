from __future__ import annotations

import argparse
import logging
import sys

from dcr_review.content import ContentFetcher, ItemSource
from dcr_review.errors import ConfigError, RetrievalError
from dcr_review.header import validate_header
from dcr_review.logger import setup_logging
from dcr_review.review_queue import ReviewQueue
from dcr_review.server import create_app
from dcr_review.settings import Settings, load_settings
from dcr_review.sheets_client import SheetsRowStore

_LOG = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Serve the DCR side-by-side review queue")
    parser.add_argument(
        "--local",
        action="store_true",
        help="Compare against local DCR (port 3030) rather than PROD",
    )
    parser.add_argument("--port", type=int, default=None)
    parser.add_argument("--sheet-id", type=str, default=None, help="Overrides GOOGLE_SHEETS_ID")
    parser.add_argument("--sheet-name", type=str, default=None, help="Overrides REVIEW_SHEET_NAME")
    parser.add_argument("--dotenv-path", type=str, default=None)
    args = parser.parse_args(argv)

    try:
        settings = load_settings(
            dotenv_path=args.dotenv_path,
            sheet_id=args.sheet_id,
            sheet_name=args.sheet_name,
        )
        setup_logging(settings.log_level)
        queue = _build_queue(settings)
    except ConfigError as exc:
        _LOG.error("startup.config_error error=%s", exc)
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    app = create_app(
        queue,
        fetcher=ContentFetcher(timeout_seconds=settings.fetch_timeout_seconds),
        item_source=ItemSource(api_key=settings.capi_key, timeout_seconds=settings.fetch_timeout_seconds),
        local_dcr=args.local or settings.local_dcr,
    )
    port = args.port or settings.port
    _LOG.info(
        "startup.serving host=%(host)s port=%(port)s sheet_id=%(sheet_id)s tab=%(tab)s",
        {
            "host": settings.host,
            "port": port,
            "sheet_id": settings.google_sheets_id,
            "tab": settings.review_sheet_name,
        },
    )
    app.run(host=settings.host, port=port, threaded=True)
    return 0


def _build_queue(settings: Settings) -> ReviewQueue:
    store = SheetsRowStore(
        service_account_path=settings.google_service_account_json,
        sheet_id=settings.google_sheets_id,
        sheet_name=settings.review_sheet_name,
        timeout_seconds=settings.sheets_timeout_seconds,
    )
    try:
        header = store.header()
    except RetrievalError as exc:
        raise ConfigError(f"Could not read header row of {settings.review_sheet_name!r}: {exc}") from exc
    validate_header(header)
    return ReviewQueue(store, reject_duplicates=settings.reject_duplicate_decisions)


if __name__ == "__main__":
    raise SystemExit(main())

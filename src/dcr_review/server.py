"""Flask surface for the review queue and the ad-hoc diff page."""

from __future__ import annotations

import logging

from flask import Flask, Response, jsonify, render_template, request

from dcr_review.content import (
    BREAKPOINTS,
    DEFAULT_TARGET,
    EVERGREENS,
    ContentFetcher,
    ItemSource,
    dcr_url,
    dcr_variant,
    frontend_url,
)
from dcr_review.errors import (
    DuplicateDecisionError,
    FetchError,
    InvalidRequestError,
    PersistenceError,
    RetrievalError,
)
from dcr_review.models import LatestItem, QueueView, decision_from_comment
from dcr_review.review_queue import ReviewQueue

_LOG = logging.getLogger(__name__)


def create_app(
    queue: ReviewQueue,
    *,
    fetcher: ContentFetcher | None = None,
    item_source: ItemSource | None = None,
    local_dcr: bool = False,
) -> Flask:
    app = Flask(__name__)
    fetcher = fetcher or ContentFetcher()
    item_source = item_source or ItemSource()

    def _render_queue(view: QueueView) -> str:
        row = view.row
        return render_template(
            "queue.html",
            row=row,
            dcr_url=dcr_variant(row.url, local=local_dcr) if row else "",
        )

    def _error_page(status: int, title: str, message: str) -> tuple[str, int]:
        return render_template("error.html", title=title, message=message), status

    @app.errorhandler(RetrievalError)
    def _retrieval_failed(exc: RetrievalError) -> tuple[str, int]:
        _LOG.error("http.retrieval_error path=%s error=%s", request.path, exc)
        return _error_page(500, "Could not read the review sheet", f"{exc}. Reload to try again.")

    @app.errorhandler(PersistenceError)
    def _persistence_failed(exc: PersistenceError) -> tuple[str, int]:
        _LOG.error("http.persistence_error path=%s error=%s", request.path, exc)
        return _error_page(
            500,
            "Decision was not saved",
            f"{exc}. Go back and submit the decision again.",
        )

    @app.errorhandler(InvalidRequestError)
    def _invalid(exc: InvalidRequestError) -> tuple[str, int]:
        return _error_page(400, "Bad request", str(exc))

    @app.errorhandler(DuplicateDecisionError)
    def _duplicate(exc: DuplicateDecisionError) -> tuple[str, int]:
        return _error_page(409, "Decision conflict", f"{exc}. Open the queue to continue.")

    @app.route("/health", methods=["GET"])
    def health() -> Response:
        return jsonify({"ok": True, "service": "dcr-review"})

    @app.route("/queue", methods=["GET"])
    def queue_page() -> str:
        return _render_queue(queue.current())

    @app.route("/queue", methods=["POST"])
    def queue_decide() -> str:
        raw_row = (request.form.get("row") or "").strip()
        row_index: int | None = None
        if raw_row:
            try:
                row_index = int(raw_row)
            except ValueError as exc:
                raise InvalidRequestError(f"row must be a number, got {raw_row!r}") from exc
        comment = request.form.get("comment")
        if request.form.get("decision") == "reject" and not (comment or "").strip():
            raise InvalidRequestError("reject needs a comment")
        try:
            decision = decision_from_comment(comment)
        except ValueError as exc:
            raise InvalidRequestError("reject needs a comment") from exc
        view = queue.decide(
            decision,
            row_index=row_index,
            expected_url=(request.form.get("url") or "").strip() or None,
        )
        return _render_queue(view)

    @app.route("/proxy", methods=["GET"])
    def proxy() -> Response:
        url = (request.args.get("url") or "").strip()
        if not url:
            return Response("missing url parameter", status=400, mimetype="text/plain")
        try:
            fetched = fetcher.fetch(url)
        except FetchError as exc:
            return Response(str(exc), status=502, mimetype="text/plain")
        response = Response(fetched.body, status=200)
        if fetched.content_type:
            response.headers["Content-Type"] = fetched.content_type
        else:
            del response.headers["Content-Type"]
        return response

    @app.route("/", methods=["GET"])
    def diff_page() -> str:
        target = (request.args.get("target") or "").strip() or DEFAULT_TARGET
        latests: list[LatestItem] = []
        latest_error = None
        try:
            latests = item_source.list_recent()
        except FetchError as exc:
            latest_error = str(exc)

        width = BREAKPOINTS["mobile"]
        return render_template(
            "diff.html",
            frontend_url=frontend_url(target),
            dcr_url=dcr_url(target, local=local_dcr),
            width=width,
            height=width * 3,
            evergreens=EVERGREENS,
            latests=latests,
            latest_error=latest_error,
        )

    return app

"""Microservice computing streak and consistency stats for a completion ledger."""

from __future__ import annotations

import logging
import sys
import threading
from datetime import date

import zmq

from config import settings
from ledger import CompletionLedger
from logging_config import setup_logging
from models import parse_day_key
from stats import habit_stats, overall_stats

logger = logging.getLogger(__name__)

SERVICE_NAME = "stats-service"
REQUEST_TYPE = "habit_stats"


def _error(message):
    """Return a consistent error payload."""
    return {"ok": False, "error": message}


def _extract_habit_ids(payload):
    """Pull out habit ids or return an error message."""
    habits = payload.get("habits")
    if not isinstance(habits, list):
        return [], "Request must contain a 'habits' array."
    return [str(h) for h in habits], None


def _build_ledger(completions):
    """Turn a {day-key: [ids]} mapping into a ledger, or return an error message."""
    if not isinstance(completions, dict):
        return None, "Request must contain a 'completions' object."
    days = {}
    for key, ids in completions.items():
        try:
            day = parse_day_key(key)
        except (TypeError, ValueError):
            return None, f"Invalid day key '{key}'."
        if not isinstance(ids, list):
            return None, f"Completions for '{key}' must be an array."
        days[day] = {str(i) for i in ids}
    return CompletionLedger.from_days(days), None


def _extract_month(payload):
    """Validate year/month/today; returns (year, month, today, error)."""
    year, month = payload.get("year"), payload.get("month")
    if not isinstance(year, int) or not isinstance(month, int) or not 1 <= month <= 12:
        return None, None, None, "Request must contain integer 'year' and 'month' (1-12)."
    raw_today = payload.get("today")
    if raw_today is None:
        return year, month, date.today(), None
    try:
        return year, month, parse_day_key(raw_today), None
    except (TypeError, ValueError):
        return None, None, None, f"Invalid 'today' value '{raw_today}'."


def process_request(payload: dict) -> dict:
    """
    payload: {"request_type", "habits", "completions", "year", "month", "today"?}
    returns dict with ok/result or ok/error
    """
    if not isinstance(payload, dict):
        return _error("Request must be a JSON object.")
    if payload.get("request_type") != REQUEST_TYPE:
        return _error(f"Unsupported request_type. Expected '{REQUEST_TYPE}'.")
    habit_ids, error = _extract_habit_ids(payload)
    if error:
        return _error(error)
    ledger, error = _build_ledger(payload.get("completions"))
    if error:
        return _error(error)
    year, month, today, error = _extract_month(payload)
    if error:
        return _error(error)
    return {
        "ok": True,
        "result": {
            "overall": overall_stats(habit_ids, ledger, year, month, today),
            "habits": habit_stats(habit_ids, ledger, year, month, today),
        },
    }


def watch_stdin_for_quit(stop: threading.Event):
    """Set `stop` once the operator types 'q' on the service console."""
    print(f"{SERVICE_NAME}: type 'q' then Enter to stop.")
    for line in sys.stdin:
        if line.strip().lower() == "q":
            logger.info("%s: shutdown requested from console.", SERVICE_NAME)
            stop.set()
            return


def handle_one(socket):
    """Answer a single pending request."""
    try:
        payload = socket.recv_json()
    except ValueError:
        socket.send_json(_error("Invalid JSON in request body."))
        return
    try:
        response = process_request(payload)
    except Exception as exc:
        logger.exception("%s failed to process a request", SERVICE_NAME)
        response = _error(f"Internal error: {exc}")
    socket.send_json(response)


def serve_requests(socket, stop: threading.Event):
    """Answer inbound requests until `stop` is set."""
    while not stop.is_set():
        if socket.poll(timeout=1000):
            handle_one(socket)


def parse_port(argv) -> int:
    """First CLI argument as the port, else the configured stats port."""
    if not argv:
        return settings.stats_port
    try:
        return int(argv[0])
    except ValueError:
        logger.warning(
            "%s: invalid port '%s', using %s instead.", SERVICE_NAME, argv[0], settings.stats_port
        )
        return settings.stats_port


def run_service(port: int, stop: threading.Event | None = None):
    """Bind the REP socket on `port` and answer stats requests until stopped."""
    stop = stop or threading.Event()
    context = zmq.Context()
    socket = context.socket(zmq.REP)
    socket.bind(f"tcp://*:{port}")
    logger.info("%s listening on port %s (request_type=%s)", SERVICE_NAME, port, REQUEST_TYPE)
    threading.Thread(target=watch_stdin_for_quit, args=(stop,), daemon=True).start()
    try:
        serve_requests(socket, stop)
    except KeyboardInterrupt:
        logger.info("%s interrupted via keyboard.", SERVICE_NAME)
    finally:
        logger.info("%s on port %s shutting down.", SERVICE_NAME, port)
        socket.close(linger=0)
        context.term()


def main(argv=None):
    setup_logging()
    run_service(parse_port(sys.argv[1:] if argv is None else argv))
    return 0


if __name__ == "__main__":
    sys.exit(main())


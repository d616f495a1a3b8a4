"""Helpers to call the ZeroMQ stats microservice from the Tk application."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

import zmq

from config import settings
from models import day_key

logger = logging.getLogger(__name__)

_CONTEXT = zmq.Context.instance()


# ---------- Low-level send helpers ----------
def _make_socket(host: str, port: int, timeout_ms: int):
    socket = _CONTEXT.socket(zmq.REQ)
    socket.setsockopt(zmq.RCVTIMEO, timeout_ms)
    socket.setsockopt(zmq.SNDTIMEO, timeout_ms)
    socket.setsockopt(zmq.LINGER, 0)
    socket.connect(f"tcp://{host}:{port}")
    return socket


def _send_json(payload: dict, host: str, port: int, timeout_ms: int):
    socket = _make_socket(host, port, timeout_ms)
    try:
        socket.send_json(payload)
        return socket.recv_json(), None
    except zmq.error.Again:
        logger.warning("Stats service on port %s timed out.", port)
        return None, f"Timed out contacting service on port {port}."
    except (zmq.ZMQError, ValueError) as exc:
        logger.warning("Stats service on port %s failed: %s", port, exc)
        return None, f"Service error on port {port}: {exc}"
    finally:
        socket.close()


# ---------- Microservice callers ----------
def build_stats_request(repo, year: int, month: int, today: Optional[date] = None) -> dict:
    """Shape the repo's habits and ledger into a stats request."""
    return {
        "request_type": "habit_stats",
        "habits": [h.id for h in repo.list_habits()],
        "completions": repo.completion_payload(),
        "year": year,
        "month": month,
        "today": day_key(today or date.today()),
    }


def stats_overview(
    repo,
    year: int,
    month: int,
    today: Optional[date] = None,
    host: Optional[str] = None,
    port: Optional[int] = None,
    timeout_ms: Optional[int] = None,
):
    """Ask the stats service for overall and per-habit figures."""
    if not repo.list_habits():
        return None, "No habits yet."

    response, error = _send_json(
        build_stats_request(repo, year, month, today),
        host or settings.stats_host,
        port or settings.stats_port,
        timeout_ms or settings.timeout_ms,
    )
    if error:
        return None, error
    if not response.get("ok"):
        return None, response.get("error", "Unknown stats error.")
    return response.get("result", {}), None

"""Lightweight Telegram notification for packing experiment progress.

Sends plain-text messages to a Telegram chat via the Bot API for:
- Experiment start/end notifications
- Dataset completion milestones
- Packing failures
- Final results summary

No retry logic: progress updates are non-critical.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx

logger = logging.getLogger(__name__)

TELEGRAM_API = "https://api.telegram.org/bot{token}/sendMessage"


async def send_telegram(
    message: str,
    chat_id: str | None = None,
    token: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bool:
    """Send a plain-text message to a Telegram chat.

    Args:
        message: Text to send.
        chat_id: Telegram chat ID. Defaults to TELEGRAM_CHAT_ID env var.
        token: Bot token. Defaults to TELEGRAM_BOT_TOKEN env var.
        transport: Optional httpx transport (used by tests).

    Returns:
        True if the message was sent successfully, False otherwise.
    """
    token = token or os.environ.get("TELEGRAM_BOT_TOKEN", "")
    if not token:
        return False

    chat_id = chat_id or os.environ.get("TELEGRAM_CHAT_ID", "")
    if not chat_id:
        return False

    url = TELEGRAM_API.format(token=token)
    payload = {"chat_id": chat_id, "text": message}

    try:
        async with httpx.AsyncClient(timeout=10.0, transport=transport) as client:
            resp = await client.post(url, json=payload)
            data = resp.json()
            return bool(data.get("ok", False))
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Telegram notification failed: %s", exc)
        return False


def format_experiment_start(
    total_datasets: int,
    items_per_dataset: int,
    strategies: list[str],
    bin_names: list[str],
) -> str:
    """Format experiment start notification message.

    Example:
        >>> print(format_experiment_start(10, 30, ["greedy"], ["small", "large"]))
        Experiment Started
        Strategies: greedy
        Datasets: 10 (30 items each)
        Bins: small, large
    """
    return (
        f"Experiment Started\n"
        f"Strategies: {', '.join(strategies)}\n"
        f"Datasets: {total_datasets} ({items_per_dataset} items each)\n"
        f"Bins: {', '.join(bin_names)}"
    )


def format_dataset_milestone(
    datasets_completed: int,
    total_datasets: int,
    avg_utilization: float,
) -> str:
    """Format dataset completion milestone notification.

    Example:
        >>> print(format_dataset_milestone(3, 10, 78.5))
        Progress Update
        Completed: 3/10 datasets (30%)
        Avg Utilization: 78.5%
    """
    progress_pct = (datasets_completed / total_datasets) * 100
    return (
        f"Progress Update\n"
        f"Completed: {datasets_completed}/{total_datasets} datasets ({progress_pct:.0f}%)\n"
        f"Avg Utilization: {avg_utilization:.1f}%"
    )


def format_error(error_type: str, error_message: str, context: dict[str, Any] | None = None) -> str:
    """Format error notification message.

    Example:
        >>> print(format_error("InvalidBinsVolumeError", "invalid bins volume", {"dataset": 3}))
        Error: InvalidBinsVolumeError
        invalid bins volume
        Context: dataset=3
    """
    lines = [
        f"Error: {error_type}",
        error_message,
    ]
    if context:
        ctx_str = ", ".join(f"{k}={v}" for k, v in context.items())
        lines.append(f"Context: {ctx_str}")
    return "\n".join(lines)


def format_final_summary(
    total_bins: int,
    total_items: int,
    unfit_items: int,
    avg_utilization: float,
    runtime_seconds: float,
    errors: int,
) -> str:
    """Format final experiment results summary.

    Example:
        >>> print(format_final_summary(45, 1000, 3, 79.2, 3600, 2))
        Experiment Complete
        Bins: 45
        Items: 1000 (3 unfit)
        Avg Utilization: 79.2%
        Runtime: 60.0 minutes
        Errors: 2
    """
    runtime_minutes = runtime_seconds / 60
    return (
        f"Experiment Complete\n"
        f"Bins: {total_bins}\n"
        f"Items: {total_items} ({unfit_items} unfit)\n"
        f"Avg Utilization: {avg_utilization:.1f}%\n"
        f"Runtime: {runtime_minutes:.1f} minutes\n"
        f"Errors: {errors}"
    )

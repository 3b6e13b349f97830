"""
Refresh failure alerting via Slack webhook.

Config-driven via config/settings.yaml under 'alerts'. An AlertManager
instance is a valid error reporter for RefreshScheduler.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx

from snapshot_service.core.config import Config
from snapshot_service.core.errors import SnapshotServiceError
from snapshot_service.core.observability.logger import get_logger

log = get_logger(__name__)


class AlertManager:
    """Logs every refresh failure and forwards it to Slack when enabled."""

    def __init__(
        self,
        *,
        enabled: Optional[bool] = None,
        slack_webhook_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.enabled = enabled if enabled is not None else bool(Config.get("alerts", "enabled", default=False))
        self.slack_webhook_url = slack_webhook_url or Config.get("alerts", "slack_webhook_url")
        self.timeout_seconds = float(
            timeout_seconds if timeout_seconds is not None else Config.get("alerts", "timeout_seconds", default=10)
        )
        self._transport = transport

    async def _send_slack(self, text: str, blocks: Optional[List[Dict[str, Any]]] = None) -> bool:
        if not self.slack_webhook_url:
            log.warning("slack_alert_skip", extra={"reason": "missing_webhook_url"})
            return False

        payload: Dict[str, Any] = {"text": text}
        if blocks:
            payload["blocks"] = blocks

        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                r = await client.post(self.slack_webhook_url, json=payload)
                r.raise_for_status()
            log.info("slack_alert_sent", extra={"status_code": r.status_code})
            return True
        except httpx.HTTPError:
            log.error("slack_alert_failed", exc_info=True)
            return False

    async def __call__(self, source_name: str, phase: str, error: BaseException) -> None:
        log.error(
            f"{phase}_error",
            extra={
                "source": source_name,
                "phase": phase,
                "error": error.as_dict() if isinstance(error, SnapshotServiceError) else repr(error),
            },
        )
        if not self.enabled:
            return

        message = getattr(error, "message", str(error))
        details = getattr(error, "details", {}).get("error", {})
        cause = details.get("message", "N/A")
        timestamp = datetime.now(timezone.utc).isoformat()
        await self._send_slack(
            f":warning: {type(error).__name__} for {source_name}",
            blocks=[
                {
                    "type": "section",
                    "text": {
                        "type": "mrkdwn",
                        "text": f"*{type(error).__name__}*\n*Source*: {source_name}\n*Phase*: {phase}\n*Message*: {message}\n*Cause*: {cause}",
                    },
                },
                {"type": "context", "elements": [{"type": "mrkdwn", "text": f"Timestamp: {timestamp}"}]},
            ],
        )


__all__ = ["AlertManager"]

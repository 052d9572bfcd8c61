"""
Webhook forwarding service (n8n or any JSON endpoint).
"""

import logging
from typing import Any, Dict, Optional

import httpx

from ..config import Config
from ..utils.exceptions import WebhookError


async def send_to_webhook(webhook_url: str, payload: Dict[str, Any], timeout: Optional[float] = None,
                          transport: Optional[httpx.AsyncBaseTransport] = None) -> Any:
    """
    POST a JSON payload to a caller-supplied webhook and return its JSON reply.

    Args:
        webhook_url: Target URL
        payload: JSON-serializable body
        timeout: Seconds before giving up (defaults to Config.WEBHOOK_TIMEOUT)
        transport: Optional httpx transport (tests use httpx.MockTransport)

    Returns:
        Parsed JSON response body

    Raises:
        WebhookError: On a non-2xx status, a network error or a non-JSON reply
    """
    timeout = timeout or Config.WEBHOOK_TIMEOUT
    headers = {
        "Content-Type": "application/json",
        "User-Agent": Config.WEBHOOK_USER_AGENT,
    }

    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            logging.info(f"Sending payload to webhook {webhook_url}")
            response = await client.post(webhook_url, json=payload, headers=headers)

        logging.info(f"Webhook response status: {response.status_code}")

        if not response.is_success:
            raise WebhookError(
                f"n8n webhook failed: HTTP {response.status_code} - {response.reason_phrase}",
                status_code=response.status_code,
                reason=response.reason_phrase,
            )

        result = response.json()
        logging.info("Webhook call successful")
        return result
    except WebhookError as e:
        logging.error(f"Webhook failed: {e}")
        raise WebhookError(f"Failed to send to n8n: {e}", status_code=e.webhook_status, reason=e.reason) from e
    except Exception as e:
        logging.error(f"Webhook failed: {e}")
        raise WebhookError(f"Failed to send to n8n: {e}") from e

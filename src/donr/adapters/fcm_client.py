"""Firebase Cloud Messaging HTTP v1 client."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

_logger = logging.getLogger(__name__)


class PushClient(Protocol):
    """Interface for push-message delivery."""

    async def send(
        self, token: str, title: str, body: str, data: dict[str, str]
    ) -> str:
        """Deliver a message to a device token and return the message id."""


@dataclass
class HttpxFcmClient(PushClient):
    """FCM client implemented with httpx."""

    project_id: str
    access_token: str
    http_client: httpx.AsyncClient
    base_url: str = "https://fcm.googleapis.com/v1"

    @classmethod
    def create(cls, project_id: str, access_token: str) -> "HttpxFcmClient":
        """Create an FCM client with a managed httpx session."""
        return cls(
            project_id=project_id,
            access_token=access_token,
            http_client=httpx.AsyncClient(),
        )

    async def send(
        self, token: str, title: str, body: str, data: dict[str, str]
    ) -> str:
        """Send a notification message via messages:send."""
        url = f"{self.base_url}/projects/{self.project_id}/messages:send"
        payload = {
            "message": {
                "token": token,
                "notification": {"title": title, "body": body},
                "data": data,
            }
        }
        response = await self.http_client.post(
            url,
            json=payload,
            headers={"Authorization": f"Bearer {self.access_token}"},
            timeout=10,
        )
        response.raise_for_status()
        message_id = response.json().get("name")
        if not message_id:
            raise RuntimeError("FCM returned no message name")
        return str(message_id)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


@dataclass
class LoggingPushClient(PushClient):
    """Push client used when FCM credentials are not configured."""

    sent: int = 0

    async def send(
        self, token: str, title: str, body: str, data: dict[str, str]
    ) -> str:
        """Record the message locally without contacting a provider."""
        self.sent += 1
        _logger.info("Push delivery disabled, dropping message: title=%s", title)
        return f"local-{self.sent}"

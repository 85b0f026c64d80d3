"""Push notification dispatch."""

import asyncio
import logging
from dataclasses import dataclass

from donr.adapters.fcm_client import PushClient
from donr.domain.errors import NotFoundError
from donr.services.users import UserRepository

_logger = logging.getLogger(__name__)


@dataclass
class NotificationService:
    """Resolve recipients' push tokens and deliver messages."""

    user_repository: UserRepository
    push_client: PushClient

    async def send(
        self,
        recipient_id: str,
        title: str,
        body: str,
        data: dict[str, object] | None = None,
    ) -> str | None:
        """Send to one user; returns None when the user has no push token."""
        user = await self.user_repository.get_user(recipient_id)
        if user is None:
            raise NotFoundError("User not found")
        if not user.push_token:
            _logger.warning("No push token for user %s", recipient_id)
            return None

        payload = {key: str(value) for key, value in (data or {}).items()}
        payload["click_action"] = "FLUTTER_NOTIFICATION_CLICK"
        message_id = await self.push_client.send(user.push_token, title, body, payload)
        _logger.info("Notification sent: user=%s message=%s", recipient_id, message_id)
        return message_id

    async def send_to_many(
        self,
        recipient_ids: list[str],
        title: str,
        body: str,
        data: dict[str, object] | None = None,
    ) -> list[str | None]:
        """Send to every recipient concurrently, tolerating individual failures."""
        results = await asyncio.gather(
            *(self.send(user_id, title, body, data) for user_id in recipient_ids),
            return_exceptions=True,
        )
        delivered: list[str | None] = []
        for user_id, result in zip(recipient_ids, results, strict=True):
            if isinstance(result, BaseException):
                _logger.error(
                    "Failed to send notification to %s: %s",
                    user_id,
                    result,
                    exc_info=result,
                )
                delivered.append(None)
            else:
                delivered.append(result)
        _logger.info(
            "Notifications dispatched: recipients=%s delivered=%s",
            len(recipient_ids),
            sum(1 for item in delivered if item),
        )
        return delivered

    async def notify_distributors_about_donation(
        self, distributor_ids: list[str], donation_id: str, food_type: str
    ) -> list[str | None]:
        """Tell nearby distributors a new donation was posted."""
        return await self.send_to_many(
            distributor_ids,
            "New Food Donation Available",
            f"A new {food_type} donation is available nearby!",
            {"type": "new_donation", "donationId": donation_id, "foodType": food_type},
        )

    async def notify_donator_about_distribution(
        self, donator_id: str, donation_id: str
    ) -> str | None:
        """Tell the donator their donation reached people in need."""
        return await self.send(
            donator_id,
            "Food Successfully Distributed",
            "Your donation has been successfully distributed to those in need!",
            {"type": "donation_distributed", "donationId": donation_id},
        )

    async def notify_acceptor_about_food(
        self, acceptor_id: str, distributor_id: str, food_type: str
    ) -> str | None:
        """Tell an acceptor that food is available at a nearby distributor."""
        return await self.send(
            acceptor_id,
            "Food Available Near You",
            f"{food_type} is now available at a nearby distribution center!",
            {
                "type": "food_available",
                "distributorId": distributor_id,
                "foodType": food_type,
            },
        )

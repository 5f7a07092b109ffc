"""User profile and subscription endpoints client."""

from __future__ import annotations

import requests

from .base import BaseClient
from ..errors import ApiError
from ..models.datatypes import SubscriptionInfo, UserInfo


class UserClient(BaseClient):
    """Client for `/v1/user` and `/v1/user/subscription`."""

    async def get_user_info(self) -> UserInfo:
        """Return the profile of the user owning the configured API key."""

        response = await self._send_request("/v1/user", operation="get_user_info")
        return self._decode_json(response, UserInfo, operation="get_user_info")

    async def get_user_subscription_info(self) -> SubscriptionInfo:
        """Return subscription tier, limits, and usage counters."""

        response = await self._send_request(
            "/v1/user/subscription", operation="get_user_subscription_info"
        )
        return self._decode_json(response, SubscriptionInfo, operation="get_user_subscription_info")

    async def _send_request(self, path: str, *, operation: str) -> requests.Response:
        """GET one user resource, logging the HTTP status of any non-2xx answer."""

        try:
            return await self._send(self._request("GET", path), operation=operation)
        except ApiError as exc:
            self.logger.log_error(
                "user_request_failed",
                path=path,
                status=exc.status_code,
            )
            raise

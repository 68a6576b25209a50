"""
userclient/services/user_service.py

Purpose: Users API integration

- One coroutine per users API endpoint (list, fetch, update, wallet...)
- Returns response bodies as decoded JSON, untouched
- Wraps every failure in a RequestError with a readable message
- Remembers the logged-in user id in the injected session storage
"""

import httpx
from typing import Any, Dict, Optional, Union

from userclient.core.config import settings
from userclient.core.exceptions import RequestError
from userclient.core.logging import get_logger
from userclient.schemas.response import RequestFailure
from userclient.storage.session_store import (
    ACTIVE_USER_ID_KEY,
    FileSessionStorage,
    SessionStorage,
)

logger = get_logger(__name__)

UserId = Union[str, int]

# Message prefix per operation, followed by ": <original error message>"
ERROR_MESSAGES = {
    "get_all_users": "Erreur lors de la récupération des utilisateurs",
    "get_user_by_id": "Erreur lors de la récupération des détails de l'utilisateur",
    "update_user": "Erreur lors de la mise à jour de l'utilisateur",
    "update_is_connected": "Erreur lors de la mise à jour de isConnected",
    "login_user": "Erreur lors de la connexion de l'utilisateur",
    "logout_user": "Erreur lors de la déconnexion de l'utilisateur",
    "update_user_email": "Erreur lors de la mise à jour de l'email de l'utilisateur",
    "add_money_to_wallet": "Erreur lors de l'ajout d'argent au portefeuille de l'utilisateur",
    "deduct_from_wallet": "Erreur lors de la déduction du portefeuille de l'utilisateur",
}


def _decode_body(response: httpx.Response) -> Any:
    """Parsed JSON body, the raw text if it is not JSON, None if empty."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _build_request_error(
    operation: str,
    exc: BaseException,
    method: Optional[str] = None,
    url: Optional[str] = None
) -> RequestError:
    if isinstance(exc, httpx.HTTPStatusError):
        reason = f"{exc.response.status_code} {exc.response.reason_phrase}".strip()
        message = f"{ERROR_MESSAGES[operation]}: Request failed with status code {reason}"
    else:
        message = f"{ERROR_MESSAGES[operation]}: {exc}"

    if isinstance(exc, RequestError):
        # Keep the structured failure of the inner call
        details = exc.details
    elif isinstance(exc, httpx.HTTPStatusError):
        details = RequestFailure(
            method=method,
            url=url,
            status_code=exc.response.status_code,
            response_body=_decode_body(exc.response),
            cause_type=type(exc).__name__,
            cause_message=str(exc),
        )
    else:
        details = RequestFailure(
            method=method,
            url=url,
            cause_type=type(exc).__name__,
            cause_message=str(exc),
        )

    return RequestError(message, operation=operation, cause=exc, details=details)


class UserService:
    """
    Client for the users REST API.

    Every request-issuing method performs exactly one HTTP call. Nothing is
    validated, retried or cached on this side.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        storage: Optional[SessionStorage] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None
    ):
        self.base_url = (base_url or settings.USERS_API_BASE_URL).rstrip("/")
        self.storage = storage if storage is not None else FileSessionStorage(settings.SESSION_STORE_PATH)
        self._timeout = timeout if timeout is not None else settings.USERS_API_TIMEOUT
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            kwargs = {}
            if self._timeout is not None:
                kwargs["timeout"] = self._timeout
            self._client = httpx.AsyncClient(**kwargs)
        return self._client

    async def _request(
        self,
        operation: str,
        method: str,
        path: str = "",
        payload: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug(
            f"{method} {url}",
            extra={"operation": operation, "method": method, "url": url}
        )

        try:
            response = await self._get_client().request(method, url, json=payload, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as e:
            error = _build_request_error(operation, e, method=method, url=url)
            logger.error(
                error.message,
                extra={
                    "operation": operation,
                    "method": method,
                    "url": url,
                    "status_code": error.status_code
                }
            )
            raise error from e
        except Exception as e:
            # Request could not be built (unencodable payload, invalid URL...)
            error = _build_request_error(operation, e, method=method, url=url)
            logger.error(
                error.message,
                extra={"operation": operation, "method": method, "url": url},
                exc_info=True
            )
            raise error from e

        return _decode_body(response)

    async def get_all_users(self) -> Any:
        """
        Returns:
            Every user, as returned by the API (a JSON list)

        Raises:
            RequestError: If the request fails
        """
        return await self._request("get_all_users", "GET")

    async def get_user_by_id(self, user_id: UserId) -> Any:
        """
        Args:
            user_id: User identifier

        Returns:
            The user's details

        Raises:
            RequestError: If the request fails
        """
        return await self._request("get_user_by_id", "GET", f"/{user_id}")

    async def update_user(self, user_id: UserId, user_data: Any) -> Any:
        """
        Replaces the user's data.

        Args:
            user_id: User identifier
            user_data: Full new user payload, sent as is

        Returns:
            The updated user

        Raises:
            RequestError: If the request fails
        """
        return await self._request("update_user", "PUT", f"/{user_id}", payload=user_data)

    async def update_is_connected(self, user_id: UserId, is_connected: bool) -> Any:
        """
        Sets the user's connection flag.

        Raises:
            RequestError: If the request fails
        """
        return await self._request(
            "update_is_connected",
            "PUT",
            f"/{user_id}/isConnected",
            payload={"isConnected": is_connected},
            headers={"Content-Type": "application/json"}
        )

    async def login_user(self, user_id: UserId) -> Any:
        """
        Marks the user as connected, then remembers them as the active user.

        The stored id is only written once the API accepted the update.

        Returns:
            The updated user

        Raises:
            RequestError: If the update (or storing the id) fails
        """
        try:
            updated_user = await self.update_is_connected(user_id, True)
            self.storage.set(ACTIVE_USER_ID_KEY, str(user_id))
        except Exception as e:
            raise _build_request_error("login_user", e) from e

        logger.info("User logged in", extra={"user_id": str(user_id), "operation": "login_user"})
        return updated_user

    async def logout_user(self, user_id: UserId) -> Any:
        """
        Marks the user as disconnected, then forgets the active user.

        Returns:
            The updated user

        Raises:
            RequestError: If the update (or clearing the id) fails
        """
        try:
            updated_user = await self.update_is_connected(user_id, False)
            self.storage.remove(ACTIVE_USER_ID_KEY)
        except Exception as e:
            raise _build_request_error("logout_user", e) from e

        logger.info("User logged out", extra={"user_id": str(user_id), "operation": "logout_user"})
        return updated_user

    def get_logged_in_user_id(self) -> Optional[str]:
        """
        Id of the user logged in through this client, or None.

        Workaround rather than a session system: the id is whatever the last
        successful login stored, with no expiry and no check against the API.
        An unreadable store counts as "nobody logged in".
        """
        try:
            return self.storage.get(ACTIVE_USER_ID_KEY)
        except Exception:
            logger.warning("Could not read the active user id", exc_info=True)
            return None

    async def update_user_email(self, user_id: UserId, new_email: str) -> Any:
        """
        Updates the user's email.

        Raises:
            RequestError: If the request fails
        """
        return await self._request(
            "update_user_email", "PUT", f"/{user_id}/email", payload={"email": new_email}
        )

    async def add_money_to_wallet(self, user_id: UserId, amount: Any) -> Any:
        """
        Adds money to the user's wallet.

        Raises:
            RequestError: If the request fails
        """
        return await self._request(
            "add_money_to_wallet", "PUT", f"/{user_id}/wallet", payload={"amount": amount}
        )

    async def deduct_from_wallet(self, user_id: UserId, amount: Any) -> Any:
        """
        Deducts money from the user's wallet.

        Raises:
            RequestError: If the request fails
        """
        return await self._request(
            "deduct_from_wallet", "PUT", f"/{user_id}/wallet/deduct", payload={"amount": amount}
        )

    async def close(self):
        """Closes the HTTP client if this service created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "UserService":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


# Global user service instance
_user_service: Optional[UserService] = None


def get_user_service() -> UserService:
    """Get or create the global user service instance."""
    global _user_service
    if _user_service is None:
        _user_service = UserService()
    return _user_service


async def close_user_service():
    """Close the global user service and release its HTTP client."""
    global _user_service
    if _user_service:
        await _user_service.close()
        _user_service = None

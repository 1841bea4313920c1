"""Translator API client.

This module defines a simple client wrapper around the Translator REST
API.  The client uses the ``requests`` library internally to make HTTP
calls and exposes one method per endpoint:

* :meth:`list_languages`, :meth:`get_language`, :meth:`create_language`,
  :meth:`update_language`, :meth:`delete_language` – manage languages.
* :meth:`list_tags`, :meth:`get_tag`, :meth:`create_tag`, :meth:`update_tag`,
  :meth:`delete_tag` – manage tags.
* :meth:`list_messages`, :meth:`get_message`, :meth:`create_message`,
  :meth:`update_message`, :meth:`delete_message`,
  :meth:`list_translations` – manage original messages and translations.

Every method returns a tuple ``(data, error)``.  On success ``error`` is
``None``; on failure ``data`` is empty and ``error`` is a dictionary with
the keys ``status_code`` and ``message``.  Callers never have to catch
``requests`` exceptions themselves.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class TranslatorAPI:
    """Client for interacting with the Translator API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_prefix: str = "/api/v1",
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:8000``.
            api_prefix: Path prefix of the versioned API.
            timeout: Timeout in seconds applied to every request.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
        """
        self.base_url = base_url.rstrip("/") + api_prefix
        self.timeout = timeout
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to the API prefix (e.g. ``/messages/``).
            params: Query parameters; ``None`` values are dropped.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``. ``data`` contains the parsed JSON
            response on success (``None`` for empty responses).
        """
        url = f"{self.base_url}{path}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or err_json.get("message") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _list(self, path: str, params: Dict[str, Any] | None = None) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", path, params=params)
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def _delete(self, path: str) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("DELETE", path)
        if error:
            return False, error
        return True, None

    # ------------------------------------------------------------------
    # Language operations
    # ------------------------------------------------------------------
    def list_languages(self, *, limit: int = 100, offset: int = 0) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list("/languages/", {"limit": limit, "offset": offset})

    def get_language(self, language_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/languages/{language_id}")

    def create_language(self, name: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("POST", "/languages/", json_body={"name": name})

    def update_language(self, language_id: int, name: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("PUT", f"/languages/{language_id}", json_body={"name": name})

    def delete_language(self, language_id: int) -> Tuple[bool, Optional[Error]]:
        return self._delete(f"/languages/{language_id}")

    # ------------------------------------------------------------------
    # Tag operations
    # ------------------------------------------------------------------
    def list_tags(self, *, limit: int = 100, offset: int = 0) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list("/tags/", {"limit": limit, "offset": offset})

    def get_tag(self, tag_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/tags/{tag_id}")

    def create_tag(self, name: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("POST", "/tags/", json_body={"name": name})

    def update_tag(self, tag_id: int, name: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("PUT", f"/tags/{tag_id}", json_body={"name": name})

    def delete_tag(self, tag_id: int) -> Tuple[bool, Optional[Error]]:
        return self._delete(f"/tags/{tag_id}")

    # ------------------------------------------------------------------
    # Message operations
    # ------------------------------------------------------------------
    def list_messages(
        self,
        *,
        content: Optional[str] = None,
        language_id: Optional[int] = None,
        tag_id: Optional[int] = None,
        originals_only: bool = False,
        limit: int = 100,
        offset: int = 0,
    ) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve messages, optionally filtered.

        Args:
            content: Case-insensitive substring the content must contain.
            language_id: Only messages in this language.
            tag_id: Only messages carrying this tag.
            originals_only: Skip translations.
        """
        params = {
            "content": content,
            "language_id": language_id,
            "tag_id": tag_id,
            "originals_only": "true" if originals_only else None,
            "limit": limit,
            "offset": offset,
        }
        return self._list("/messages/", params)

    def get_message(self, message_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/messages/{message_id}")

    def create_message(
        self,
        *,
        language_id: int,
        content: str,
        original_message_id: Optional[int] = None,
        tag_ids: Sequence[int] = (),
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create an original message or, with ``original_message_id``, a translation."""
        payload = _message_payload(original_message_id, language_id, content, tag_ids)
        return self._request("POST", "/messages/", json_body=payload)

    def update_message(
        self,
        message_id: int,
        *,
        language_id: int,
        content: str,
        original_message_id: Optional[int] = None,
        tag_ids: Sequence[int] = (),
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        payload = _message_payload(original_message_id, language_id, content, tag_ids)
        return self._request("PUT", f"/messages/{message_id}", json_body=payload)

    def delete_message(self, message_id: int) -> Tuple[bool, Optional[Error]]:
        return self._delete(f"/messages/{message_id}")

    def list_translations(self, message_id: int) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list(f"/messages/{message_id}/translations")


def _message_payload(
    original_message_id: Optional[int],
    language_id: int,
    content: str,
    tag_ids: Sequence[int],
) -> Dict[str, Any]:
    return {
        "original_message_id": original_message_id,
        "language_id": language_id,
        "content": content,
        "tag_ids": list(tag_ids),
    }

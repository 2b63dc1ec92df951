"""HTTP client for the form builder API, used by the Streamlit UI"""
from typing import Any, Dict, List, Optional
import logging

import httpx

logger = logging.getLogger(__name__)


class FormBuilderAPIError(Exception):
    """Non-2xx response from the API"""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class FormBuilderClient:
    """Thin wrapper over the five form endpoints"""

    def __init__(self, base_url: str, timeout: float = 10.0, transport: Optional[httpx.BaseTransport] = None):
        self._client = httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout, transport=transport)

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def create_form(
        self,
        title: str,
        description: str,
        fields: List[Dict[str, Any]],
        created_by: str
    ) -> Dict[str, Any]:
        """Create a form; returns {"form": ..., "link": ...}"""
        return self._request("POST", "/forms", json={
            "title": title,
            "description": description,
            "fields": [
                {"name": f["name"], "type": f["type"], "required": bool(f.get("required", False))}
                for f in fields
            ],
            "createdBy": created_by
        })

    def get_form(self, form_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/forms/{form_id}")

    def list_forms(self, created_by: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"createdBy": created_by} if created_by else None
        return self._request("GET", "/forms", params=params)

    def submit(self, token: str, user_id: str, responses: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", f"/forms/{token}/submissions", json={
            "userId": user_id,
            "responses": responses
        })

    def list_submissions(self, token: str) -> List[Dict[str, Any]]:
        return self._request("GET", f"/forms/{token}/submissions")

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise FormBuilderAPIError(0, f"Could not reach the form builder API: {e}")

        if response.is_success:
            return response.json()

        try:
            message = response.json().get("error") or response.text
        except (ValueError, AttributeError):
            message = response.text
        logger.error(f"{method} {path} returned {response.status_code}: {message}")
        raise FormBuilderAPIError(response.status_code, message)

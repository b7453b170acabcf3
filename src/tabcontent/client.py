"""Departments API client.

Fetches department tab content for the renderer. Payloads are returned as
untrusted records; the normalizer deals with whatever shape they carry.
"""

import logging
import time
from typing import Any, Optional, Union

import httpx
from pydantic import ValidationError

from tabcontent.config import DEFAULT_API_BASE_URL, TabContentConfig
from tabcontent.models import Department, RawTabContent, TabType, optional_int


logger = logging.getLogger(__name__)


class ContentFetchError(RuntimeError):
    """Raised when tab content cannot be fetched or the API reports failure."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DepartmentsClient:
    """Client for the departments API with retry handling."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        timeout: float = 30.0,
    ):
        """Initialize the departments client.

        Args:
            base_url: API root, e.g. ``http://localhost:8000/api``.
            max_retries: Maximum number of retries for failed requests.
            retry_delay: Base delay between retries (exponential backoff).
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.timeout = timeout
        self._client: Optional[httpx.Client] = None

    @classmethod
    def from_config(cls, config: TabContentConfig) -> "DepartmentsClient":
        return cls(
            base_url=config.api_base_url,
            max_retries=config.max_retries,
            retry_delay=config.retry_delay,
            timeout=config.timeout,
        )

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
                follow_redirects=True,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "DepartmentsClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _request_with_retry(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Make a request, retrying transport errors (including timeouts) and 5xx responses.

        Raises:
            ContentFetchError: If the request still fails after all retries
        """
        for attempt in range(self.max_retries + 1):
            try:
                response = self.client.request(method, url, **kwargs)
                if response.status_code >= 500:
                    response.raise_for_status()
                return response
            except (httpx.TransportError, httpx.HTTPStatusError) as e:
                if attempt < self.max_retries:
                    delay = self.retry_delay * (2 ** attempt)  # Exponential backoff
                    logger.warning("Request %s %s failed (%s), retrying in %.1fs", method, url, e, delay)
                    time.sleep(delay)
                    continue
                status = e.response.status_code if isinstance(e, httpx.HTTPStatusError) else None
                raise ContentFetchError(f"Request to {url} failed: {e}", status) from e
        raise ContentFetchError(f"Request to {url} failed")

    def get_data(self, url: str, **kwargs) -> Any:
        """GET an endpoint and unwrap the ``{success, data, message}`` envelope."""
        response = self._request_with_retry("GET", url, **kwargs)
        if not response.is_success:
            raise ContentFetchError(
                f"HTTP error! status: {response.status_code}",
                response.status_code,
            )
        try:
            result = response.json()
        except ValueError as e:
            raise ContentFetchError(f"Invalid JSON from {url}") from e

        if not isinstance(result, dict) or not result.get("success"):
            message = result.get("message") if isinstance(result, dict) else None
            raise ContentFetchError(message or f"Request to {url} was not successful")
        return result.get("data")

    def get_department_with_tabs(self, department_id: int) -> Department:
        """Fetch a department with all of its tab contents."""
        data = self.get_data(f"/departments/{department_id}/details")
        if not isinstance(data, dict) or optional_int(data.get("id")) is None:
            raise ContentFetchError(f"Malformed department payload for {department_id}")
        try:
            return Department.from_payload(data)
        except ValidationError as e:
            raise ContentFetchError(f"Malformed department payload for {department_id}: {e}") from e

    def get_department_tabs(
        self,
        department_id: int,
        active: Optional[bool] = None,
        tab_type: Union[TabType, str, None] = None,
    ) -> list[RawTabContent]:
        """Fetch all tab content records of a department."""
        params: dict[str, str] = {}
        if active is not None:
            params["active"] = str(active).lower()
        if tab_type:
            params["tab_type"] = str(getattr(tab_type, "value", tab_type))
        data = self.get_data(f"/departments/{department_id}/tabs", params=params)
        if not isinstance(data, list):
            return []
        return [RawTabContent.from_payload(c) for c in data]

    def get_tab_content(
        self,
        department_id: int,
        tab_type: Union[TabType, str],
    ) -> RawTabContent:
        """Fetch one tab content record."""
        tab = getattr(tab_type, "value", tab_type)
        data = self.get_data(f"/departments/{department_id}/tabs/{tab}")
        content = RawTabContent.from_payload(data)
        if not isinstance(data, dict) or "tab_type" not in data:
            content.tab_type = tab
        return content

    def get_tab_types(self) -> dict[str, str]:
        """Fetch the available tab types as a value -> label mapping."""
        data = self.get_data("/department-tab-types")
        if not isinstance(data, dict):
            return {}
        labels = data.get("labels") if isinstance(data.get("labels"), dict) else {}
        types = data.get("types") if isinstance(data.get("types"), list) else list(labels)
        return {t: str(labels.get(t, t)) for t in types if isinstance(t, str)}

"""Client for the remote vulnerability analysis API."""

import httpx
import structlog

from .errors import AnalysisApiError
from .models import ParsedDependencies

log = structlog.get_logger("depscout")

USER_AGENT = "depscout/0.1.0"

_STATUS_MESSAGES = {
    400: "Validation Error",
    401: "Authentication Error: Invalid or missing API key",
    403: "Authorization Error: Access denied",
    404: "Not Found: API endpoint not found",
    429: "Rate Limit Exceeded: Too many requests, try again later or use an API key",
}


class AnalysisClient:
    """Submit parsed dependencies for vulnerability lookup."""

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize analysis client.

        Args:
            base_url: Root URL of the analysis API
            api_key: Optional key sent as the ``apiKey`` query parameter
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/") + "/"
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        params = {"apiKey": self.api_key} if self.api_key else None
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            params=params,
            headers={"User-Agent": USER_AGENT, "Content-Type": "application/json"},
            transport=self._transport,
        )

    async def analyze(self, parsed: ParsedDependencies) -> dict:
        """Analyze a dependency list for known vulnerabilities."""
        payload = {
            "ecosystem": str(parsed.ecosystem),
            "dependencies": [dep.to_dict() for dep in parsed.dependencies],
        }
        return await self._request("POST", "api/v1/analyze", json=payload)

    async def health_check(self) -> dict:
        return await self._request("GET", "api/v1/health")

    async def get_info(self) -> dict:
        return await self._request("GET", "api/v1/info")

    async def get_stats(self) -> dict:
        return await self._request("GET", "api/v1/stats")

    async def _request(self, method: str, url: str, **kwargs) -> dict:
        log.debug("api.request", method=method, url=url)
        try:
            async with self._client() as client:
                response = await client.request(method, url, **kwargs)
                log.debug("api.response", status=response.status_code, url=url)
                response.raise_for_status()
                return response.json()
        except httpx.TimeoutException as e:
            raise AnalysisApiError("Timeout Error: Request took too long", cause=e) from e
        except httpx.HTTPStatusError as e:
            raise self._status_error(e) from e
        except httpx.RequestError as e:
            raise AnalysisApiError("Network Error: Unable to connect to API", cause=e) from e
        except ValueError as e:
            raise AnalysisApiError("Invalid response: API did not return JSON", cause=e) from e

    @staticmethod
    def _status_error(error: httpx.HTTPStatusError) -> AnalysisApiError:
        status = error.response.status_code
        log.error("api.error", status=status)

        if status == 400:
            detail = ""
            try:
                body = error.response.json()
                if isinstance(body, dict):
                    detail = body.get("message") or ""
            except ValueError:
                pass
            message = f"{_STATUS_MESSAGES[400]}: {detail or 'Invalid request parameters'}"
        elif status in _STATUS_MESSAGES:
            message = _STATUS_MESSAGES[status]
        elif status >= 500:
            message = "Server Error: API is temporarily unavailable"
        else:
            message = f"API Error: {status}"

        return AnalysisApiError(message, status_code=status, cause=error)

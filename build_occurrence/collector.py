import httpx
from typing import Optional

from .errors import ConfigurationError
from .types.occurrence import BuildOccurrenceRequest

CREATE_BUILD_PATH = "/v1alpha1/builds"
CONNECT_TIMEOUT_SECONDS = 5.0

def collector_base_url(host: str, insecure: bool) -> str:
    if "://" not in host:
        scheme = "http" if insecure else "https"
        return f"{scheme}://{host}".rstrip("/")

    scheme = host.split("://", 1)[0].lower()
    if scheme == "http" and not insecure:
        raise ConfigurationError(
            f"unable to build config: BUILD_COLLECTOR_HOST {host!r} is plain http; set BUILD_COLLECTOR_INSECURE to allow it"
        )
    return host.rstrip("/")

class BuildCollectorClient:
    """Calls the build collector's CreateBuild RPC over its HTTP/JSON gateway."""

    def __init__(
        self,
        host: str,
        insecure: bool = False,
        access_token: str = "",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {"Accept": "application/json"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"

        self._client = httpx.AsyncClient(
            base_url=collector_base_url(host, insecure),
            headers=headers,
            timeout=httpx.Timeout(15.0, connect=CONNECT_TIMEOUT_SECONDS),
            transport=transport,
        )

    async def close(self):
        await self._client.aclose()

    async def create_build(self, request: BuildOccurrenceRequest) -> str:
        resp = await self._client.post(CREATE_BUILD_PATH, json=request.to_payload())
        resp.raise_for_status()
        data = resp.json() or {}
        return data.get("buildOccurrenceId") or data.get("build_occurrence_id") or ""

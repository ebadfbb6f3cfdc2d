import httpx
from typing import Any, Dict, Optional

from .config import DEFAULT_API_URL

class GitHubClient:
    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_API_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=httpx.Timeout(15.0),
            transport=transport,
        )

    async def close(self):
        await self._client.aclose()

    async def get_json(self, url: str) -> Any:
        # single attempt; callers treat any failure as terminal
        resp = await self._client.get(url)
        resp.raise_for_status()
        return resp.json()

    async def list_jobs_for_workflow_run(self, owner: str, repo: str, run_id: int) -> Dict[str, Any]:
        return await self.get_json(
            f"/repos/{owner}/{repo}/actions/runs/{run_id}/jobs",
        )

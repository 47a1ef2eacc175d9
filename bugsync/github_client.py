# bugsync/github_client.py
import httpx
from typing import Union

from bugsync.core.errors import UpstreamFailure

USER_AGENT = "bugsync-plus"


def error_body(resp: httpx.Response):
    """GitHub's error payload as JSON when possible, raw text otherwise."""
    try:
        return resp.json()
    except ValueError:
        return resp.text


class GitHubClient:
    def __init__(self, client_or_token: Union[httpx.AsyncClient, str]):
        # Standard base URL for GitHub API
        self.base_url = "https://api.github.com"

        # A prepared AsyncClient is reused as-is (tests pass one with a mock transport).
        if isinstance(client_or_token, httpx.AsyncClient):
            self.client = client_or_token
            self.headers = None
        else:
            self.client = None
            access_token = str(client_or_token)
            self.headers = {
                "Authorization": f"token {access_token}",
                "Accept": "application/vnd.github+json",
                "User-Agent": USER_AGENT,
            }

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Send one request; any non-2xx answer becomes UpstreamFailure."""
        if self.client:
            resp = await self.client.request(method, url, **kwargs)
        else:
            # No timeout: a hung GitHub call only holds up its own request.
            async with httpx.AsyncClient(headers=self.headers, timeout=None) as client:
                resp = await client.request(method, url, **kwargs)
        if resp.is_error:
            raise UpstreamFailure(resp.status_code, error_body(resp))
        return resp

    async def get_repos(self) -> list[dict]:
        resp = await self._request("GET", f"{self.base_url}/user/repos", params={"per_page": 100})
        return resp.json()

    async def create_issue(self, owner: str, repo: str, title: str, body: str, labels: list[str]) -> dict:
        url = f"{self.base_url}/repos/{owner}/{repo}/issues"
        payload = {"title": title, "body": body, "labels": labels}
        resp = await self._request("POST", url, json=payload)
        return resp.json()

    async def get_issue(self, owner: str, repo: str, number: int) -> dict:
        url = f"{self.base_url}/repos/{owner}/{repo}/issues/{number}"
        resp = await self._request("GET", url)
        return resp.json()

"""
HTTP helpers shared by the provider validators.
"""

from typing import Any

import httpx

from agent_setup import __version__
from agent_setup.errors import DownloadError

USER_AGENT = f"agent-setup/{__version__}"


def create_http_client(timeout: float = 15.0) -> httpx.Client:
    """Create the client every remote check in a run goes through."""
    return httpx.Client(
        timeout=timeout,
        headers={"User-Agent": USER_AGENT},
        follow_redirects=True,
    )


def download_json(client: httpx.Client, url: str) -> Any:
    """
    Fetch and decode a JSON document.

    Raises:
        DownloadError: On transport errors, non-2xx responses or invalid JSON
    """
    try:
        response = client.get(url)
        response.raise_for_status()
        return response.json()
    except httpx.HTTPStatusError as e:
        raise DownloadError(
            f"Failed to download {url}: HTTP {e.response.status_code}"
        ) from e
    except httpx.HTTPError as e:
        raise DownloadError(f"Failed to download {url}: {e}") from e
    except ValueError as e:
        raise DownloadError(f"Failed to parse JSON from {url}: {e}") from e

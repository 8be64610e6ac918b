"""
Schedule Downloader Service

Retrieves the schedule HTML document.
A single synchronous request per refresh pass; failures are not retried here,
the next scheduled pass is the retry.
"""
import logging

import httpx

from run_ticker.errors import FetchFailure


logger = logging.getLogger(__name__)


def download_schedule_html(
    url: str,
    timeout: float = 10.0,
    client: httpx.Client | None = None
) -> str:
    """
    Download the schedule page and return its decoded body

    Args:
        url: Schedule page URL
        timeout: HTTP timeout in seconds
        client: Optional pre-configured client (a temporary one is created otherwise)

    Returns:
        Decoded HTML document text

    Raises:
        FetchFailure: On network errors, timeouts, non-2xx status or undecodable body
    """
    logger.debug(f"Downloading schedule from {url}...")

    try:
        if client is None:
            with httpx.Client(timeout=timeout, follow_redirects=True) as own_client:
                response = own_client.get(url)
        else:
            response = client.get(url, timeout=timeout)
        response.raise_for_status()
        document = response.text

    except httpx.TimeoutException as e:
        logger.warning(f"Schedule download timed out after {timeout:.1f}s: {type(e).__name__}")
        raise FetchFailure(f"Timed out fetching {url}") from e

    except httpx.HTTPStatusError as e:
        logger.warning(f"Schedule download failed with HTTP {e.response.status_code}")
        raise FetchFailure(f"HTTP {e.response.status_code} fetching {url}") from e

    except httpx.HTTPError as e:
        logger.warning(f"Schedule download failed (network error): {type(e).__name__}: {e}")
        raise FetchFailure(f"Network error fetching {url}: {e}") from e

    except (UnicodeDecodeError, LookupError) as e:
        logger.warning(f"Schedule body could not be decoded: {e}")
        raise FetchFailure(f"Undecodable response body from {url}") from e

    logger.debug(f"Downloaded {len(document) / 1024:.1f} KB of schedule HTML")
    return document

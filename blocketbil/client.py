from __future__ import annotations

import logging
from typing import Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from .errors import DecodeError, ExtractionError, NetworkError, NotFoundError
from .models import CategoryCatalog, SearchResult

logger = logging.getLogger(__name__)

SITE_URL = "https://www.blocket.se/"
API_URL = "https://api.blocket.se"
CATALOG_PATH = "/classifieds/v1/ad_counters"
SEARCH_PATH = "/search_bff/v1/content"
CARS_CATEGORY = "cg=1020"
DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/123.0 Safari/537.36"
)
TOKEN_MARKER = "bearerToken"

M = TypeVar("M", bound=BaseModel)


def create_session(user_agent: str = DEFAULT_USER_AGENT) -> requests.Session:
    session = requests.Session()
    session.headers.update({"User-Agent": user_agent})
    return session


def extract_token(html: str) -> str:
    """Pull the bearer token out of the front page markup.

    The page embeds its state as JavaScript, so the token shows up as
    ``bearerToken":"<value>"``. Only the first occurrence of the marker is
    considered and the value is whatever sits between the second and third
    quote characters after it.
    """

    _, marker, tail = html.partition(TOKEN_MARKER)
    if not marker:
        raise ExtractionError(f"'{TOKEN_MARKER}' not found in page")

    segments = tail.split('"')
    if len(segments) < 4:
        raise ExtractionError(f"no quoted value follows '{TOKEN_MARKER}'")

    token = segments[2]
    if not token:
        raise ExtractionError(f"'{TOKEN_MARKER}' value is empty")
    return token


def _get(
    session: requests.Session,
    url: str,
    *,
    token: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Response:
    headers = {"authorization": f"Bearer {token}"} if token is not None else None
    logger.debug("GET %s", url)
    try:
        response = session.get(url, headers=headers, timeout=timeout)
    except requests.Timeout as exc:
        raise NetworkError(f"request to {url} timed out after {timeout:g}s") from exc
    except requests.RequestException as exc:
        raise NetworkError(f"request to {url} failed: {exc}") from exc

    try:
        response.raise_for_status()
    except requests.HTTPError as exc:
        raise NetworkError(
            f"request to {url} returned HTTP {response.status_code}",
            status_code=response.status_code,
        ) from exc
    return response


def _decode(response: requests.Response, model_cls: Type[M]) -> M:
    try:
        return model_cls.model_validate_json(response.content)
    except ValidationError as exc:
        raise DecodeError(
            f"could not decode {model_cls.__name__} from {response.url}: {exc.error_count()} error(s)"
        ) from exc


def build_api_url(api_url: str, path: str, query_params: str) -> str:
    query = f"{query_params}&include=all" if query_params else "include=all"
    return f"{api_url.rstrip('/')}{path}?{query}"


def acquire_token(
    session: requests.Session,
    site_url: str = SITE_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    response = _get(session, site_url, timeout=timeout)
    token = extract_token(response.text)
    logger.debug("Acquired bearer token from %s", site_url)
    return token


def fetch_catalog(
    session: requests.Session,
    token: str,
    query_params: str,
    *,
    api_url: str = API_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> CategoryCatalog:
    """Fetch the category counters matching ``query_params``.

    With the plain vehicle category filter this is the brand list; with a
    brand's search parameters it is the model list of that brand.
    """

    url = build_api_url(api_url, CATALOG_PATH, query_params)
    catalog = _decode(_get(session, url, token=token, timeout=timeout), CategoryCatalog)
    logger.info("Catalog for '%s' has %d entries", query_params, len(catalog.category_counters))
    return catalog


def fetch_listings(
    session: requests.Session,
    token: str,
    model_query_params: str,
    *,
    api_url: str = API_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> SearchResult:
    if not model_query_params:
        raise NotFoundError("no model search parameters given; refusing an unfiltered search")

    url = build_api_url(api_url, SEARCH_PATH, model_query_params)
    result = _decode(_get(session, url, token=token, timeout=timeout), SearchResult)
    logger.info("Search returned %d ads", len(result.data))
    return result

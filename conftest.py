from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import pytest
import requests

SITE_URL = "https://www.blocket.se/"
BRANDS_URL = "https://api.blocket.se/classifieds/v1/ad_counters?cg=1020&include=all"
VOLVO_MODELS_URL = "https://api.blocket.se/classifieds/v1/ad_counters?cg=1020&brand=abc&include=all"
V70_ADS_URL = "https://api.blocket.se/search_bff/v1/content?cg=1020&brand=abc&model=xyz&include=all"

FRONT_PAGE = '<html><script>window.__STATE__={"auth":{"bearerToken":"abc123","expires":60}}</script></html>'


def make_response(body: Union[str, bytes, Dict[str, Any]], status: int = 200, url: str = "") -> requests.Response:
    response = requests.Response()
    response.status_code = status
    if isinstance(body, dict):
        body = json.dumps(body)
    response._content = body.encode("utf-8") if isinstance(body, str) else body
    response.encoding = "utf-8"
    response.url = url
    return response


class FakeSession:
    """Stands in for ``requests.Session``; answers GETs from a url -> outcome table."""

    def __init__(self, routes: Dict[str, Union[requests.Response, Exception]]) -> None:
        self.routes = routes
        self.calls: List[Dict[str, Any]] = []
        self.headers: Dict[str, str] = {}
        self.closed = False

    def get(self, url: str, headers: Optional[Dict[str, str]] = None, timeout: Optional[float] = None):
        self.calls.append({"url": url, "headers": dict(headers or {}), "timeout": timeout})
        if url not in self.routes:
            raise AssertionError(f"unexpected request to {url}")
        outcome = self.routes[url]
        if isinstance(outcome, Exception):
            raise outcome
        if not outcome.url:
            outcome.url = url
        return outcome

    def close(self) -> None:
        self.closed = True

    @property
    def urls(self) -> List[str]:
        return [call["url"] for call in self.calls]


def catalog_payload(*entries: Tuple[str, str]) -> Dict[str, Any]:
    return {
        "category_counters": [
            {"label": label, "search_parameters": params, "api_query": params, "ad_counter": index + 1}
            for index, (label, params) in enumerate(entries)
        ]
    }


def ad_payload(
    ad_id: str,
    subject: str = "Volvo V70 2.4",
    price: Optional[int] = 89000,
    locations: Sequence[str] = ("Göteborg", "Centrum"),
    parameters: Optional[Sequence[Tuple[str, str, str]]] = None,
) -> Dict[str, Any]:
    if parameters is None:
        parameters = (
            ("fuel", "Bränsle", "Diesel"),
            ("gearbox", "Växellåda", "Automat"),
            ("mileage", "Miltal", "18 500"),
            ("regdate", "Modellår", "2012"),
        )
    return {
        "ad_id": ad_id,
        "ad_status": "active",
        "list_id": f"list-{ad_id}",
        "subject": subject,
        "price": {"label": "Pris", "suffix": "kr", "value": price},
        "location": [{"id": str(i), "name": name, "query_key": "r"} for i, name in enumerate(locations)],
        "parameter_groups": [
            {
                "label": "Fordonsinformation",
                "type": "general",
                "parameters": [{"id": pid, "label": label, "value": value} for pid, label, value in parameters],
            }
        ],
        "share_url": f"https://www.blocket.se/annons/{ad_id}",
    }


@pytest.fixture
def pipeline_routes() -> Dict[str, Union[requests.Response, Exception]]:
    return {
        SITE_URL: make_response(FRONT_PAGE),
        BRANDS_URL: make_response(catalog_payload(("Audi", "cg=1020&brand=aud"), ("Volvo", "cg=1020&brand=abc"))),
        VOLVO_MODELS_URL: make_response(
            catalog_payload(("V60", "cg=1020&brand=abc&model=v60"), ("V70", "cg=1020&brand=abc&model=xyz"))
        ),
        V70_ADS_URL: make_response(
            {
                "data": [
                    ad_payload("1"),
                    ad_payload("2", locations=("Malmö",)),
                    ad_payload("3", parameters=(("fuel", "Bränsle", "Bensin"),)),
                ],
                "total_count": 3,
            }
        ),
    }

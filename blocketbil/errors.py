"""Exceptions raised while talking to the Blocket API and exporting ads."""

from __future__ import annotations

from typing import Optional


class BlocketError(Exception):
    """Base class for every failure the CLI reports as a one-line error."""


class NetworkError(BlocketError):
    """A request could not complete, timed out, or returned a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ExtractionError(BlocketError):
    """The bearer token could not be located in the front page HTML."""


class DecodeError(BlocketError):
    """An API response body was not the JSON shape we expected."""


class NotFoundError(BlocketError):
    """A brand or model label did not match any catalog entry."""


class RowError(BlocketError):
    """A single ad lacks a field needed for its export row."""

    def __init__(self, message: str, ad_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.ad_id = ad_id

from __future__ import annotations

from dataclasses import astuple, dataclass
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

NOT_AVAILABLE = "N/A"


class _ApiModel(BaseModel):
    # Unknown keys are kept so the JSON dump shows the full API payload.
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)


class CategoryCounter(_ApiModel):
    label: str = ""
    search_parameters: str = ""
    api_query: Optional[str] = None
    ad_counter: int = 0


class CategoryCatalog(_ApiModel):
    """Brand list, or the model list of one brand, in API order."""

    category_counters: List[CategoryCounter] = Field(default_factory=list)

    @field_validator("category_counters", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def labels(self) -> List[str]:
        return [counter.label for counter in self.category_counters]


class Location(_ApiModel):
    id: Optional[str] = None
    name: Optional[str] = None
    query_key: Optional[str] = None


class Parameter(_ApiModel):
    id: Optional[str] = None
    label: Optional[str] = None
    value: Optional[str] = None


class ParameterGroup(_ApiModel):
    label: Optional[str] = None
    type: Optional[str] = None
    parameters: List[Parameter] = Field(default_factory=list)

    @field_validator("parameters", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class Attribute(_ApiModel):
    header: Optional[str] = None
    id: Optional[str] = None
    items: List[str] = Field(default_factory=list)

    @field_validator("items", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class Price(_ApiModel):
    label: Optional[str] = None
    suffix: Optional[str] = None
    value: Optional[int] = None


class Ad(_ApiModel):
    ad_id: Optional[str] = None
    ad_status: Optional[str] = None
    list_id: Optional[str] = None
    subject: Optional[str] = None
    price: Optional[Price] = None
    location: List[Location] = Field(default_factory=list)
    parameter_groups: List[ParameterGroup] = Field(default_factory=list)
    attributes: List[Attribute] = Field(default_factory=list)
    license_plate: Optional[str] = None
    share_url: Optional[str] = None

    @field_validator("location", "parameter_groups", "attributes", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class SearchResult(_ApiModel):
    """Ads returned by one search request.

    Entries stay raw so that one oddly shaped ad is skipped at export time
    instead of failing the whole response.
    """

    data: List[Any] = Field(default_factory=list)

    @field_validator("data", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


@dataclass
class ExportRow:
    subject: str
    price: str
    mileage: str
    year: str
    municipality: str
    area: str  # NOT_AVAILABLE when the ad has a single location
    url: str

    @staticmethod
    def headers() -> List[str]:
        return ["Subject", "Price", "Mileage", "Year", "Municipality", "Area", "URL"]

    def to_csv_row(self) -> List[str]:
        return list(astuple(self))

from __future__ import annotations

from pathlib import Path
from typing import Type, TypeVar

from pydantic import BaseModel, Field

from ..client import API_URL, CARS_CATEGORY, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, SITE_URL

T = TypeVar("T", bound=BaseModel)


class ClientConfig(BaseModel):
    site_url: str = SITE_URL
    api_url: str = API_URL
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Per-request timeout in seconds")
    user_agent: str = DEFAULT_USER_AGENT
    category_params: str = Field(default=CARS_CATEGORY, min_length=1)


def load_config(path: str | Path, model_cls: Type[T]) -> T:
    config_path = Path(path)
    raw = config_path.read_text(encoding="utf-8")
    return model_cls.model_validate_json(raw)

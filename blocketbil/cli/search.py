from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Tuple

import requests

from ..client import acquire_token, create_session, fetch_catalog, fetch_listings
from ..export import dump_json, export_csv
from ..models import SearchResult
from ..selector import Selection, require_selection
from .config import ClientConfig, load_config

logger = logging.getLogger(__name__)


def add_arguments(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    parser.add_argument(
        "-brand",
        "--brand",
        default="",
        help=(
            "Brand of the car to fetch. Combine with -model and/or -list. "
            "Brand names are case sensitive; escape whitespace in the shell."
        ),
    )
    parser.add_argument(
        "-model",
        "--model",
        default="",
        help=(
            "Model of the selected brand. Combine with -brand. "
            "Model names are case sensitive; escape whitespace in the shell."
        ),
    )
    parser.add_argument(
        "-list",
        "--list",
        action="store_true",
        help="List available brands, or the models of -brand, and exit.",
    )
    parser.add_argument(
        "-outdir",
        "--outdir",
        type=Path,
        default=None,
        help="Directory that receives data/<brand>/<model>/*.csv (default: current directory).",
    )
    parser.add_argument(
        "-output",
        "--output",
        action="store_true",
        help="Print the ads as JSON to stdout instead of writing CSV (ignored with -outdir).",
    )
    parser.add_argument(
        "-config",
        "--config",
        type=Path,
        default=None,
        help="Path to a JSON config file overriding URLs, timeout and user agent.",
    )
    parser.set_defaults(func=run)
    return parser


def has_valid_selection(args: argparse.Namespace) -> bool:
    if args.list:
        return True
    return bool(args.brand) and bool(args.model)


def list_labels(
    session: requests.Session,
    token: str,
    config: ClientConfig,
    brand: Optional[str] = None,
) -> List[str]:
    """Labels of every brand, or of every model of ``brand`` when given."""

    catalog = fetch_catalog(
        session, token, config.category_params, api_url=config.api_url, timeout=config.timeout
    )
    if brand:
        selected = require_selection(catalog, brand, "brand")
        catalog = fetch_catalog(
            session, token, selected.search_parameters, api_url=config.api_url, timeout=config.timeout
        )
    return catalog.labels


def fetch_model_ads(
    session: requests.Session,
    token: str,
    config: ClientConfig,
    brand: str,
    model: str,
) -> Tuple[Selection, Selection, SearchResult]:
    brands = fetch_catalog(
        session, token, config.category_params, api_url=config.api_url, timeout=config.timeout
    )
    selected_brand = require_selection(brands, brand, "brand")

    models = fetch_catalog(
        session, token, selected_brand.search_parameters, api_url=config.api_url, timeout=config.timeout
    )
    selected_model = require_selection(models, model, "model")
    logger.debug("Searching %s %s with '%s'", selected_brand.label, selected_model.label, selected_model.search_parameters)

    result = fetch_listings(
        session, token, selected_model.search_parameters, api_url=config.api_url, timeout=config.timeout
    )
    return selected_brand, selected_model, result


def run(args: argparse.Namespace) -> int:
    config = load_config(args.config, ClientConfig) if args.config else ClientConfig()

    session = create_session(config.user_agent)
    try:
        token = acquire_token(session, config.site_url, timeout=config.timeout)

        if args.list:
            for label in list_labels(session, token, config, args.brand or None):
                print(label)
            return 0

        brand, model, result = fetch_model_ads(session, token, config, args.brand, args.model)
    finally:
        session.close()

    if args.output and args.outdir is None:
        print(dump_json(result))
        return 0

    outdir = args.outdir if args.outdir is not None else Path.cwd()
    summary = export_csv(brand.label, model.label, result, outdir)
    message = f"Exported {summary.written} ads to {summary.path}"
    if summary.skipped:
        message += f"; skipped {summary.skipped} incomplete ads"
    print(message)
    return 0

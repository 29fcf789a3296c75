"""
Static per-model price table and cost computation.

Prices are USD per one million tokens. The table is read-only after import;
a model missing from it costs 0 and logs a warning, so a pricing gap never
fails a request.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)

_TOKENS_PER_UNIT = 1_000_000
_COST_PRECISION = 6

DATED_SNAPSHOT = re.compile(r"^(?P<base>.+)-\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class PriceEntry:
    input_price_per_million: float
    output_price_per_million: float


MODEL_PRICES: Mapping[str, PriceEntry] = MappingProxyType({
    "gpt-4o-mini":       PriceEntry(0.15, 0.60),
    "gpt-4o":            PriceEntry(2.50, 10.00),
    "gpt-4-turbo":       PriceEntry(10.00, 30.00),
    "gpt-4":             PriceEntry(30.00, 60.00),
    "gpt-3.5-turbo":     PriceEntry(0.50, 1.50),
    "gpt-3.5-turbo-16k": PriceEntry(3.00, 4.00),
})


def lookup_price(model: str) -> PriceEntry | None:
    """
    Find the price entry for a model name.

    Providers echo dated snapshot names (``gpt-4o-mini-2024-07-18``), so an
    exact miss retries with a trailing YYYY-MM-DD suffix removed. Any other
    name (``gpt-4-32k``, ``gpt-3.5-turbo-instruct``) is a separate product
    and stays unpriced.
    """
    entry = MODEL_PRICES.get(model)
    if entry is not None:
        return entry
    dated = DATED_SNAPSHOT.match(model)
    if dated is None:
        return None
    return MODEL_PRICES.get(dated.group("base"))


def compute_cost(model: str, prompt_tokens: int, completion_tokens: int) -> float:
    """Compute cost in USD for one request, rounded to 6 decimal places."""
    entry = lookup_price(model)
    if entry is None:
        logger.warning("No pricing information for model %s; cost recorded as 0", model)
        return 0.0

    cost_in = (prompt_tokens / _TOKENS_PER_UNIT) * entry.input_price_per_million
    cost_out = (completion_tokens / _TOKENS_PER_UNIT) * entry.output_price_per_million
    return round(cost_in + cost_out, _COST_PRECISION)

"""Resolution of declared districts into the localities they contain."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from functools import lru_cache
from pathlib import Path

from event_alerts.config import get_settings
from event_alerts.domain.districts import DEFAULT_DISTRICT_LOCALITIES

logger = logging.getLogger(__name__)


class DistrictResolver:
    """Map district names to the localities they group."""

    def __init__(self, table: Mapping[str, Iterable[str]]) -> None:
        self._table: dict[str, tuple[str, ...]] = {
            district: tuple(dict.fromkeys(localities))
            for district, localities in table.items()
        }

    @property
    def table(self) -> Mapping[str, tuple[str, ...]]:
        return dict(self._table)

    def districts(self) -> list[str]:
        return list(self._table)

    def resolve(self, districts: Iterable[str]) -> frozenset[str]:
        """Return the union of localities for ``districts``.

        Unknown district names contribute nothing.
        """

        localities: set[str] = set()
        for district in districts:
            localities.update(self._table.get(district, ()))
        return frozenset(localities)


def load_district_table(path: str | Path) -> dict[str, list[str]]:
    """Read a ``{"District": ["Locality", ...]}`` JSON document."""

    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"District map {path} must be a JSON object")

    table: dict[str, list[str]] = {}
    for district, localities in raw.items():
        if not isinstance(localities, list) or not all(
            isinstance(item, str) and item.strip() for item in localities
        ):
            raise ValueError(
                f"District '{district}' in {path} must map to a list of locality names"
            )
        table[str(district)] = [item.strip() for item in localities]
    return table


@lru_cache(maxsize=1)
def get_district_resolver() -> DistrictResolver:
    """Return the resolver for the configured district table."""

    path = get_settings().district_map_path
    if path:
        logger.info("Loading district map from %s", path)
        return DistrictResolver(load_district_table(path))
    return DistrictResolver(DEFAULT_DISTRICT_LOCALITIES)


__all__ = ["DistrictResolver", "get_district_resolver", "load_district_table"]

"""District to locality table for the province of Albay."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

DEFAULT_DISTRICT_LOCALITIES: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "District 1": (
            "Bacacay",
            "Malilipot",
            "Malinao",
            "Santo Domingo",
            "Tiwi",
            "Tabaco",
        ),
        "District 2": ("Camalig", "Guinobatan", "Ligao", "Jovellar"),
        "District 3": ("Legazpi", "Daraga", "Manito", "Rapu-Rapu"),
    }
)


__all__ = ["DEFAULT_DISTRICT_LOCALITIES"]

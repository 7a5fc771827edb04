"""Stellar reference data: class/grade ordering and the 70-entry property table."""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from typing import Iterator, Protocol

from ..constants import SOLAR_TEMPERATURE_K
from ..errors import DomainViolationError, MissingReferenceDataError

logger = logging.getLogger(__name__)

GRADES = range(10)


class StellarClass(enum.Enum):
    """Spectral classes, declared hottest to coolest."""

    O = "O"
    B = "B"
    A = "A"
    F = "F"
    G = "G"
    K = "K"
    M = "M"

    @property
    def index(self) -> int:
        return _CLASS_ORDER.index(self)

    @property
    def next_cooler(self) -> StellarClass | None:
        i = self.index + 1
        return _CLASS_ORDER[i] if i < len(_CLASS_ORDER) else None

    def hotter_than(self, other: StellarClass) -> bool:
        return self.index < other.index


_CLASS_ORDER: list[StellarClass] = list(StellarClass)


def classes_from(stellar_class: StellarClass) -> list[StellarClass]:
    """The given class and every cooler one."""
    return _CLASS_ORDER[stellar_class.index:]


def is_brighter(
    class_a: StellarClass, grade_a: int, class_b: StellarClass, grade_b: int,
) -> bool:
    """True if (class_a, grade_a) is strictly brighter than (class_b, grade_b)."""
    if class_a is not class_b:
        return class_a.hotter_than(class_b)
    return grade_a < grade_b


@dataclass(frozen=True)
class StellarClassInfo:
    color: str
    description: str
    temperature_range: str


STELLAR_CLASS_INFO: dict[StellarClass, StellarClassInfo] = {
    StellarClass.O: StellarClassInfo("Blue", "Extremely hot and luminous", "≥30,000 K"),
    StellarClass.B: StellarClassInfo("Blue-White", "Very hot and bright", "10,000-30,000 K"),
    StellarClass.A: StellarClassInfo("White", "Hot main sequence", "7,500-10,000 K"),
    StellarClass.F: StellarClassInfo("Yellow-White", "Intermediate temperature", "6,000-7,500 K"),
    StellarClass.G: StellarClassInfo("Yellow", "Sun-like stars", "5,200-6,000 K"),
    StellarClass.K: StellarClassInfo("Orange", "Cool main sequence", "3,700-5,200 K"),
    StellarClass.M: StellarClassInfo("Red", "Cool, dim, and common", "2,400-3,700 K"),
}

# Columns are grades 0-9
_MASS: dict[StellarClass, list[float]] = {
    StellarClass.O: [128.0, 116.8, 105.6, 94.4, 83.2, 72.0, 60.8, 49.6, 38.4, 27.2],
    StellarClass.B: [16.0, 14.61, 13.22, 11.83, 10.44, 9.05, 7.66, 6.27, 4.88, 3.49],
    StellarClass.A: [2.1, 2.03, 1.96, 1.89, 1.82, 1.75, 1.68, 1.61, 1.54, 1.47],
    StellarClass.F: [1.4, 1.36, 1.33, 1.29, 1.26, 1.22, 1.18, 1.15, 1.11, 1.08],
    StellarClass.G: [1.04, 1.02, 0.99, 0.97, 0.94, 0.92, 0.9, 0.87, 0.85, 0.82],
    StellarClass.K: [0.8, 0.77, 0.73, 0.7, 0.66, 0.63, 0.59, 0.56, 0.52, 0.49],
    StellarClass.M: [0.45, 0.41, 0.38, 0.34, 0.3, 0.27, 0.23, 0.19, 0.15, 0.12],
}

_LUMINOSITY: dict[StellarClass, list[float]] = {
    StellarClass.O: [3516325, 2071113, 1219884, 718510, 423202, 249266, 146817, 86475, 50934, 30000],
    StellarClass.B: [14752.9, 7260.98, 3573.66, 1758.86, 865.66, 426.06, 209.69, 103.21, 50.8, 25.0],
    StellarClass.A: [23.0, 21.2, 19.4, 17.6, 15.8, 14.0, 12.2, 10.4, 8.6, 5.0],
    StellarClass.F: [4.65, 4.34, 4.02, 3.71, 3.39, 3.08, 2.76, 2.45, 2.13, 1.5],
    StellarClass.G: [1.41, 1.33, 1.25, 1.17, 1.09, 1.01, 0.92, 0.84, 0.76, 0.6],
    StellarClass.K: [0.55, 0.5, 0.45, 0.41, 0.36, 0.31, 0.27, 0.22, 0.17, 0.08],
    StellarClass.M: [0.07, 0.07, 0.06, 0.05, 0.05, 0.04, 0.03, 0.03, 0.02, 0.01],
}

_TEMPERATURE: dict[StellarClass, list[int]] = {
    StellarClass.O: [50000, 47000, 44000, 41000, 38000, 35000, 33000, 31000, 30000, 30000],
    StellarClass.B: [30000, 25000, 22000, 18500, 16000, 15000, 14000, 13000, 11500, 10500],
    StellarClass.A: [10000, 9750, 9500, 9250, 9000, 8750, 8500, 8250, 8000, 7500],
    StellarClass.F: [7500, 7300, 7100, 6900, 6700, 6500, 6400, 6300, 6200, 6000],
    StellarClass.G: [6000, 5900, 5850, 5800, 5750, 5700, 5600, 5500, 5400, 5200],
    StellarClass.K: [5200, 5000, 4800, 4600, 4400, 4200, 4000, 3900, 3800, 3700],
    StellarClass.M: [3700, 3600, 3500, 3400, 3300, 3200, 3100, 3000, 2800, 2400],
}


@dataclass(frozen=True)
class StellarProperty:
    """Physical properties of one class/grade combination."""

    id: str
    stellar_class: StellarClass
    grade: int
    mass: float  # Solar masses
    luminosity: float  # Solar luminosities
    radius: float  # Solar radii
    temperature: int  # Kelvin
    color: str
    description: str
    temperature_range: str


def property_id(stellar_class: StellarClass, grade: int) -> str:
    return f"{stellar_class.value}{grade}"


def derive_radius(luminosity: float, temperature: float) -> float:
    """Radius in solar radii from L = R^2 T^4 (solar units)."""
    return round(math.sqrt(luminosity) * (SOLAR_TEMPERATURE_K / temperature) ** 2, 4)


def build_stellar_properties() -> list[StellarProperty]:
    """Materialise all 70 reference records."""
    records: list[StellarProperty] = []
    for stellar_class in _CLASS_ORDER:
        info = STELLAR_CLASS_INFO[stellar_class]
        for grade in GRADES:
            luminosity = _LUMINOSITY[stellar_class][grade]
            temperature = _TEMPERATURE[stellar_class][grade]
            records.append(
                StellarProperty(
                    id=property_id(stellar_class, grade),
                    stellar_class=stellar_class,
                    grade=grade,
                    mass=_MASS[stellar_class][grade],
                    luminosity=luminosity,
                    radius=derive_radius(luminosity, temperature),
                    temperature=temperature,
                    color=info.color,
                    description=info.description,
                    temperature_range=info.temperature_range,
                )
            )
    return records


class StellarPropertySource(Protocol):
    """Anything that can answer a class/grade lookup, or return None."""

    def get(self, stellar_class: StellarClass, grade: int) -> StellarProperty | None: ...


class StellarPropertyTable:
    """Read-only in-memory property table, built once and shared."""

    def __init__(self, records: list[StellarProperty] | None = None) -> None:
        records = records if records is not None else build_stellar_properties()
        self._by_id: dict[str, StellarProperty] = {r.id: r for r in records}

    def get(self, stellar_class: StellarClass, grade: int) -> StellarProperty | None:
        return self._by_id.get(property_id(stellar_class, grade))

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[StellarProperty]:
        return iter(self._by_id.values())


DEFAULT_TABLE = StellarPropertyTable()


def validate_class_grade(stellar_class: StellarClass, grade: int) -> None:
    if not isinstance(stellar_class, StellarClass):
        raise DomainViolationError(f"Unknown stellar class {stellar_class!r}")
    if isinstance(grade, bool) or not isinstance(grade, int) or grade not in GRADES:
        raise DomainViolationError(f"Stellar grade must be 0-9, got {grade!r}")


def lookup_stellar_property(
    stellar_class: StellarClass, grade: int, source: StellarPropertySource = DEFAULT_TABLE,
) -> StellarProperty:
    """Look up a valid class/grade. Missing data is a hard failure."""
    validate_class_grade(stellar_class, grade)
    record = source.get(stellar_class, grade)
    if record is None:
        raise MissingReferenceDataError(
            f"No stellar property record for {property_id(stellar_class, grade)}"
        )
    return record

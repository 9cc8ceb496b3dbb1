"""Vehicle specification model for the build evaluation engine.

A :class:`VehicleSpec` is the immutable input of every build evaluation.
:class:`VehicleDefaults` holds the lookup tables used when a caller omits a
value (curb weight) or asks for derived figures (wheel horsepower, HP sanity
ranges).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, TypeVar

from garage_engine.core.errors import InvalidInputError
from garage_engine.core.units import bhp_to_whp

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Drivetrain(str, Enum):
    """Power-delivery layout."""

    FWD = "FWD"
    RWD = "RWD"
    AWD = "AWD"
    FOUR_WD = "4WD"


DEFAULT_DRIVETRAIN = Drivetrain.FWD


class EngineType(str, Enum):
    """Induction method of the stock engine."""

    NATURALLY_ASPIRATED = "naturally_aspirated"
    TURBOCHARGED = "turbocharged"
    SUPERCHARGED = "supercharged"


class VehicleType(str, Enum):
    """Body style, used for default weights and HP sanity ranges."""

    SEDAN = "sedan"
    SPORTS_CAR = "sports_car"
    SUV = "suv"
    PICKUP_TRUCK = "pickup_truck"
    HATCHBACK = "hatchback"
    COUPE = "coupe"


_E = TypeVar("_E", bound=Enum)


def parse_enum(enum_cls: type[_E], value: Any, field_name: str) -> _E:
    """Coerce *value* into a member of *enum_cls*.

    Strings are matched against member values, case-insensitively.

    Raises:
        InvalidInputError: If *value* is missing or not a known member.
    """
    if isinstance(value, enum_cls):
        return value
    if value is None or value == "":
        raise InvalidInputError(f"{field_name} is required.")
    if isinstance(value, str):
        wanted = value.strip().lower()
        for member in enum_cls:
            if str(member.value).lower() == wanted:
                return member
    allowed = ", ".join(str(m.value) for m in enum_cls)
    raise InvalidInputError(
        f"{field_name} must be one of [{allowed}], got {value!r}."
    )


def _is_positive_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
        and value > 0
    )


# ---------------------------------------------------------------------------
# Vehicle specification
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VehicleSpec:
    """Immutable base specification of the vehicle being modified.

    Enum fields accept either the enum member or its string value; strings
    are converted on construction.

    Attributes:
        base_hp: Stock crank horsepower (> 0).
        drivetrain: Power-delivery layout.  ``None`` means FWD.
        engine_type: Induction method of the stock engine.
        vehicle_type: Body style.
        weight_lbs: Curb weight in pounds (> 0).  ``None`` means the
            default for *vehicle_type* is used.
    """

    base_hp: float
    drivetrain: Drivetrain
    engine_type: EngineType
    vehicle_type: VehicleType = VehicleType.SEDAN
    weight_lbs: float | None = None

    def __post_init__(self) -> None:
        """Validate and normalise vehicle parameters."""
        if not _is_positive_number(self.base_hp):
            raise InvalidInputError(
                f"base_hp must be a positive number, got {self.base_hp!r}."
            )
        if self.weight_lbs is not None and not _is_positive_number(self.weight_lbs):
            raise InvalidInputError(
                f"weight_lbs must be a positive number, got {self.weight_lbs!r}."
            )
        drivetrain = DEFAULT_DRIVETRAIN if self.drivetrain in (None, "") else self.drivetrain
        object.__setattr__(
            self, "drivetrain", parse_enum(Drivetrain, drivetrain, "drivetrain")
        )
        object.__setattr__(
            self, "engine_type", parse_enum(EngineType, self.engine_type, "engine_type")
        )
        object.__setattr__(
            self,
            "vehicle_type",
            parse_enum(VehicleType, self.vehicle_type, "vehicle_type"),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VehicleSpec:
        """Build a spec from a caller-supplied mapping.

        Both snake_case and the camelCase keys used by the API layer are
        accepted (``baseHorsePower``, ``weightPounds``, ``engineType``, ...).

        Raises:
            InvalidInputError: If a required field is missing or invalid.
        """

        def pick(*keys: str) -> Any:
            for key in keys:
                if key in data and data[key] is not None:
                    return data[key]
            return None

        base_hp = pick("base_hp", "baseHorsePower", "baseHP", "horsePower")
        if base_hp is None:
            raise InvalidInputError("base_hp is required.")
        return cls(
            base_hp=base_hp,
            drivetrain=pick("drivetrain"),
            engine_type=pick("engine_type", "engineType"),
            vehicle_type=pick("vehicle_type", "vehicleType") or VehicleType.SEDAN,
            weight_lbs=pick("weight_lbs", "weightPounds", "weight"),
        )


# ---------------------------------------------------------------------------
# Default tables
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VehicleDefaults:
    """Lookup tables consulted when the caller omits vehicle details.

    Attributes:
        default_weights: Curb weight in pounds by vehicle type.
        drivetrain_loss: Fraction of crank power lost by drivetrain layout.
        hp_ranges: Plausible ``(min, max)`` stock horsepower by vehicle type.
            Types without an entry fall back to the sedan range.
    """

    default_weights: Mapping[VehicleType, float]
    drivetrain_loss: Mapping[Drivetrain, float] = field(default_factory=dict)
    hp_ranges: Mapping[VehicleType, tuple[float, float]] = field(
        default_factory=dict
    )

    def __post_init__(self) -> None:
        """Validate table values."""
        for vtype, weight in self.default_weights.items():
            if not _is_positive_number(weight):
                raise ValueError(f"default weight for {vtype} must be > 0.")
        for drivetrain, loss in self.drivetrain_loss.items():
            if not 0.0 <= loss < 1.0:
                raise ValueError(
                    f"drivetrain loss for {drivetrain} must be in [0.0, 1.0)."
                )
        for vtype, (low, high) in self.hp_ranges.items():
            if low >= high:
                raise ValueError(f"hp range for {vtype} must have min < max.")

    def default_weight(self, vehicle_type: VehicleType) -> float:
        """Return the default curb weight for *vehicle_type*.

        Raises:
            InvalidInputError: If the table has no entry for the type.
        """
        try:
            return self.default_weights[vehicle_type]
        except KeyError:
            raise InvalidInputError(
                f"No default weight for vehicle type {vehicle_type.value!r}; "
                "weight_lbs must be supplied."
            ) from None

    def resolve_weight(self, vehicle: VehicleSpec) -> float:
        """Return the explicit weight of *vehicle* or the type default."""
        if vehicle.weight_lbs is not None:
            return vehicle.weight_lbs
        return self.default_weight(vehicle.vehicle_type)

    def wheel_hp(self, crank_hp: float, drivetrain: Drivetrain) -> int | None:
        """Estimate wheel horsepower, or ``None`` if the loss is unknown."""
        loss = self.drivetrain_loss.get(drivetrain)
        if loss is None:
            return None
        return bhp_to_whp(crank_hp, loss)

    def hp_range(self, vehicle_type: VehicleType) -> tuple[float, float] | None:
        """Return the sanity range for *vehicle_type* (sedan fallback)."""
        return self.hp_ranges.get(vehicle_type, self.hp_ranges.get(VehicleType.SEDAN))

    def is_valid_hp(self, hp: float, vehicle_type: VehicleType) -> bool:
        """Return True if *hp* lies within the sanity range for the type.

        Always True when no range is configured.
        """
        bounds = self.hp_range(vehicle_type)
        if bounds is None:
            return True
        low, high = bounds
        return low <= hp <= high


DEFAULT_VEHICLE_DEFAULTS = VehicleDefaults(
    default_weights={
        VehicleType.SEDAN: 3200.0,
        VehicleType.SPORTS_CAR: 3000.0,
        VehicleType.SUV: 4200.0,
        VehicleType.PICKUP_TRUCK: 4800.0,
        VehicleType.HATCHBACK: 2800.0,
        VehicleType.COUPE: 3100.0,
    },
    drivetrain_loss={
        Drivetrain.FWD: 0.15,
        Drivetrain.RWD: 0.12,
        Drivetrain.AWD: 0.20,
        Drivetrain.FOUR_WD: 0.22,
    },
    hp_ranges={
        VehicleType.SEDAN: (100.0, 800.0),
        VehicleType.SPORTS_CAR: (200.0, 1500.0),
        VehicleType.SUV: (150.0, 1000.0),
        VehicleType.PICKUP_TRUCK: (200.0, 1200.0),
    },
)

"""Aircraft type definitions.

An aircraft type definition holds the static performance data for one
aircraft type (ceiling, speeds, rates, runway requirements). The FMS reads
it to pick default altitude and speed targets.

Typical usage:
    b738 = AircraftTypeDefinition.load("config/aircraft/b738.yaml")
    print(b738.ceiling, b738.speed.cruise)
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from atcfms.core.logging_system import get_logger

logger = get_logger(__name__)


@dataclass
class SpeedProfile:
    """Characteristic speeds in knots."""

    min: float = 0.0
    max: float = 0.0
    landing: float = 0.0
    cruise: float = 0.0


@dataclass
class RateProfile:
    """Performance rates.

    Attributes:
        turn: Turn rate in radians per second
        climb: Climb rate in feet per second
        descent: Descent rate in feet per second
        accelerate: Acceleration in knots per second
        decelerate: Deceleration in knots per second
    """

    turn: float = 0.0
    climb: float = 0.0
    descent: float = 0.0
    accelerate: float = 0.0
    decelerate: float = 0.0


@dataclass
class RunwayRequirements:
    """Runway length needed, in kilometres."""

    takeoff: float = 0.0
    landing: float = 0.0


@dataclass
class AircraftTypeDefinition:
    """Static performance data for an aircraft type.

    Attributes:
        name: Type name (e.g., "Boeing 737-800")
        icao: ICAO type designator (e.g., "B738")
        ceiling: Service ceiling in feet MSL
        speed: Characteristic speeds
        rate: Performance rates
        runway: Runway requirements
        engines: Engine description (count/type), free-form
        weightclass: Wake category (e.g., "L", "M", "H", "J")
        category: Aircraft category (e.g., "jet", "turboprop")

    Examples:
        >>> b738 = AircraftTypeDefinition.from_dict(
        ...     {"icao": "B738", "ceiling": 41000, "speed": {"cruise": 460}}
        ... )
        >>> b738.speed.cruise
        460.0
    """

    name: str
    icao: str
    ceiling: float
    speed: SpeedProfile
    rate: RateProfile = field(default_factory=RateProfile)
    runway: RunwayRequirements = field(default_factory=RunwayRequirements)
    engines: Any = None
    weightclass: str | None = None
    category: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AircraftTypeDefinition":
        """Build a type definition from a mapping.

        Args:
            data: Type data; ``ceiling`` and ``speed.cruise`` are required

        Returns:
            AircraftTypeDefinition instance

        Raises:
            ValueError: If required data is missing or not numeric
        """
        if not isinstance(data, dict) or not data:
            raise ValueError("Aircraft type data must be a non-empty mapping")

        speed_data = data.get("speed") or {}
        if "ceiling" not in data or "cruise" not in speed_data:
            raise ValueError(
                f"Aircraft type {data.get('icao', '?')} requires 'ceiling' and 'speed.cruise'"
            )

        try:
            definition = cls(
                name=str(data.get("name", data.get("icao", ""))),
                icao=str(data.get("icao", "")).upper(),
                ceiling=float(data["ceiling"]),
                speed=SpeedProfile(**{k: float(v) for k, v in speed_data.items()}),
                rate=RateProfile(**{k: float(v) for k, v in (data.get("rate") or {}).items()}),
                runway=RunwayRequirements(
                    **{k: float(v) for k, v in (data.get("runway") or {}).items()}
                ),
                engines=data.get("engines"),
                weightclass=data.get("weightclass"),
                category=data.get("category"),
            )
        except TypeError as e:
            # Unknown keys inside speed/rate/runway
            raise ValueError(f"Invalid aircraft type data: {e}") from e

        logger.debug("Parsed aircraft type %s", definition.icao)
        return definition

    @classmethod
    def load(cls, config_path: str | Path) -> "AircraftTypeDefinition":
        """Load a type definition from a YAML file.

        The data may sit at the top level or under an ``aircraft:`` key.

        Args:
            config_path: Path to aircraft YAML file

        Returns:
            AircraftTypeDefinition instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file content is invalid
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Aircraft type file not found: {config_path}")

        logger.info("Loading aircraft type from: %s", config_path)

        with open(config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f)

        if isinstance(config, dict) and "aircraft" in config:
            config = config["aircraft"]

        return cls.from_dict(config)

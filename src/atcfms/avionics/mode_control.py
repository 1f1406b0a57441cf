"""Mode Control Panel (MCP).

The MCP holds a mode and a target value for each autopilot axis. Modes are
closed per axis: an altitude mode can only ever be set on the altitude axis.

Typical usage:
    mcp = ModeController()
    mcp.set_mode_and_value(McpAxis.ALTITUDE, AltitudeMode.HOLD, 9000)
    mcp.set_modes_for_arrival()
"""

from enum import Enum
from typing import Any

from atcfms.core.config import ConfigLoader
from atcfms.core.logging_system import get_logger

logger = get_logger(__name__)

NO_VALUE = -1


class McpAxis(Enum):
    """Autopilot axis."""

    ALTITUDE = "altitude"
    HEADING = "heading"
    SPEED = "speed"


class AltitudeMode(Enum):
    """Altitude axis modes."""

    OFF = "OFF"
    HOLD = "HOLD"
    APPROACH = "APPROACH"
    LEVEL_CHANGE = "LEVEL_CHANGE"
    VERTICAL_SPEED = "VERTICAL_SPEED"
    VNAV = "VNAV"


class HeadingMode(Enum):
    """Heading axis modes."""

    OFF = "OFF"
    HOLD = "HOLD"
    LNAV = "LNAV"
    VOR_LOC = "VOR_LOC"


class SpeedMode(Enum):
    """Speed axis modes."""

    OFF = "OFF"
    HOLD = "HOLD"
    LEVEL_CHANGE = "LEVEL_CHANGE"
    N1 = "N1"
    VNAV = "VNAV"


AXIS_MODES: dict[McpAxis, type[Enum]] = {
    McpAxis.ALTITUDE: AltitudeMode,
    McpAxis.HEADING: HeadingMode,
    McpAxis.SPEED: SpeedMode,
}


def resolve_target(
    base: float,
    restriction: float | None,
    mode: Enum,
    held_value: float,
    hold_mode: Enum,
) -> float:
    """Resolve one axis target from its competing sources.

    Precedence, lowest to highest: base value, route restriction, MCP hold.

    Args:
        base: Default value (e.g., type ceiling or cruise speed)
        restriction: Route restriction, None or -1 when there is none
        mode: Current MCP mode for the axis
        held_value: Current MCP value for the axis
        hold_mode: Mode in which the MCP value overrides everything

    Returns:
        The target value for the axis

    Examples:
        >>> resolve_target(41000, 11000, AltitudeMode.VNAV, 9000, AltitudeMode.HOLD)
        11000
        >>> resolve_target(41000, 11000, AltitudeMode.HOLD, 9000, AltitudeMode.HOLD)
        9000
    """
    value = base

    if restriction is not None and restriction != NO_VALUE:
        value = restriction

    if mode is hold_mode:
        value = held_value

    return value


class ModeController:
    """Per-axis autopilot mode and target store.

    Attributes:
        presets: Mode preset table keyed by flight phase, then axis

    Examples:
        >>> mcp = ModeController()
        >>> mcp.set_mode_and_value(McpAxis.HEADING, HeadingMode.HOLD, 270)
        >>> mcp.heading_mode, mcp.heading
        (<HeadingMode.HOLD: 'HOLD'>, 270)
    """

    def __init__(self, config: ConfigLoader | None = None) -> None:
        """Initialize with every axis OFF.

        Args:
            config: Configuration providing ``mode_presets``; defaults used if None
        """
        config = config or ConfigLoader.defaults()
        self.presets: dict[str, Any] = config.get_section("mode_presets")

        self._modes: dict[McpAxis, Enum] = {axis: modes.OFF for axis, modes in AXIS_MODES.items()}
        self._values: dict[McpAxis, float] = {axis: NO_VALUE for axis in McpAxis}

    @property
    def altitude_mode(self) -> AltitudeMode:
        return self._modes[McpAxis.ALTITUDE]

    @property
    def altitude(self) -> float:
        return self._values[McpAxis.ALTITUDE]

    @property
    def heading_mode(self) -> HeadingMode:
        return self._modes[McpAxis.HEADING]

    @property
    def heading(self) -> float:
        return self._values[McpAxis.HEADING]

    @property
    def speed_mode(self) -> SpeedMode:
        return self._modes[McpAxis.SPEED]

    @property
    def speed(self) -> float:
        return self._values[McpAxis.SPEED]

    def get_mode(self, axis: McpAxis) -> Enum:
        return self._modes[axis]

    def get_value(self, axis: McpAxis) -> float:
        return self._values[axis]

    def set_mode_and_value(self, axis: McpAxis, mode: Enum, value: float) -> None:
        """Set the mode and value of one axis together.

        Args:
            axis: Axis to change
            mode: Mode from that axis's own enum
            value: Target value for the axis

        Raises:
            ValueError: If ``mode`` does not belong to ``axis``
        """
        expected = AXIS_MODES[axis]
        if not isinstance(mode, expected):
            raise ValueError(f"{mode!r} is not a {axis.value} mode")

        self._modes[axis] = mode
        self._values[axis] = value

        logger.debug("MCP %s set to %s (%s)", axis.value, mode.value, value)

    def set_modes_for_arrival(self) -> None:
        """Apply the arrival mode preset.

        Raises:
            ValueError: If the preset is missing or names an unknown axis or mode
        """
        self._apply_preset("arrival")

    def set_modes_for_departure(self) -> None:
        """Apply the departure mode preset.

        Raises:
            ValueError: If the preset is missing or names an unknown axis or mode
        """
        self._apply_preset("departure")

    def _apply_preset(self, phase: str) -> None:
        preset = self.presets.get(phase)
        if not isinstance(preset, dict):
            raise ValueError(f"No MCP mode preset configured for {phase}")

        # Validate the whole preset before touching any axis
        changes: list[tuple[McpAxis, Enum, float]] = []
        for axis_name, setting in preset.items():
            axis = McpAxis(axis_name)
            mode_name = str(setting.get("mode", "")).upper()
            try:
                mode = AXIS_MODES[axis][mode_name]
            except KeyError:
                raise ValueError(
                    f"{phase} preset: {mode_name or '(none)'} is not a {axis.value} mode"
                ) from None
            value = setting.get("value", self._values[axis])
            changes.append((axis, mode, value))

        for axis, mode, value in changes:
            self.set_mode_and_value(axis, mode, value)

        logger.info("Applied %s MCP preset", phase)

"""Marker lookup tables for the semantic tagger.

Every scan table is an ordered list; the tagger takes the first entry that
matches, so table order is significant.
"""

from __future__ import annotations

# BACnet object kind -> (role, marker bundle, confidence)
OBJECT_KIND_ROLES: dict[str, tuple[str, tuple[str, ...], float]] = {
    # Analog
    "AI": ("sensor", ("sensor",), 0.9),
    "AO": ("cmd", ("cmd",), 0.9),
    "AV": ("sp", ("sp",), 0.8),
    # Binary
    "BI": ("sensor", ("sensor", "binary"), 0.9),
    "BO": ("cmd", ("cmd", "binary"), 0.9),
    "BV": ("sp", ("sp", "binary"), 0.8),
    # Multi-state
    "MI": ("sensor", ("sensor", "multi"), 0.8),
    "MO": ("cmd", ("cmd", "multi"), 0.8),
    "MV": ("sp", ("sp", "multi"), 0.7),
    # Calendar and schedule
    "CAL": ("schedule", ("schedule",), 0.7),
    "SCH": ("schedule", ("schedule",), 0.7),
    # Notification and event
    "NC": ("alarm", ("alarm", "notification"), 0.8),
    "EE": ("alarm", ("alarm", "event"), 0.8),
}

COMMAND_ROLE_CONFIDENCE = 0.6
SENSOR_ROLE_CONFIDENCE = 0.5

# Exact unit string -> (quantity, marker bundle, confidence)
UNIT_QUANTITIES: dict[str, tuple[str, tuple[str, ...], float]] = {
    # Temperature
    "°F": ("temperature", ("temp",), 0.95),
    "°C": ("temperature", ("temp",), 0.95),
    "degF": ("temperature", ("temp",), 0.95),
    "degC": ("temperature", ("temp",), 0.95),
    "F": ("temperature", ("temp",), 0.9),
    "C": ("temperature", ("temp",), 0.9),
    # Pressure
    "PSI": ("pressure", ("pressure",), 0.95),
    "Pa": ("pressure", ("pressure",), 0.95),
    "kPa": ("pressure", ("pressure",), 0.95),
    "inWC": ("pressure", ("pressure",), 0.95),
    "inH2O": ("pressure", ("pressure",), 0.95),
    "mmHg": ("pressure", ("pressure",), 0.9),
    "bar": ("pressure", ("pressure",), 0.9),
    # Flow
    "CFM": ("flow", ("flow", "air"), 0.95),
    "GPM": ("flow", ("flow", "water"), 0.95),
    "L/s": ("flow", ("flow",), 0.95),
    "L/min": ("flow", ("flow",), 0.95),
    "m³/h": ("flow", ("flow",), 0.95),
    "ft³/min": ("flow", ("flow",), 0.9),
    # Humidity
    "%RH": ("humidity", ("humidity",), 0.95),
    "RH": ("humidity", ("humidity",), 0.9),
    # Power
    "kW": ("power", ("power",), 0.95),
    "W": ("power", ("power",), 0.95),
    "HP": ("power", ("power",), 0.9),
    "BTU/h": ("power", ("power",), 0.9),
    # Energy
    "kWh": ("energy", ("energy",), 0.95),
    "Wh": ("energy", ("energy",), 0.95),
    "BTU": ("energy", ("energy",), 0.9),
    "MJ": ("energy", ("energy",), 0.9),
    # Speed
    "RPM": ("speed", ("speed",), 0.95),
    "Hz": ("freq", ("freq",), 0.95),
    # Dimensionless
    "%": ("level", ("level",), 0.8),
    "percent": ("level", ("level",), 0.8),
    # Concentration
    "ppm": ("co2", ("co2",), 0.85),
    "PPM": ("co2", ("co2",), 0.85),
    # Electrical
    "V": ("voltage", ("elec", "volt"), 0.9),
    "A": ("current", ("elec", "current"), 0.9),
    "mA": ("current", ("elec", "current"), 0.9),
}

# Quantity marker -> name substrings that imply it
QUANTITY_KEYWORDS: list[tuple[str, tuple[str, ...]]] = [
    ("temp", ("temperature", "temp", "thermal")),
    ("pressure", ("pressure", "press", "static", "differential")),
    ("flow", ("flow", "airflow", "waterflow", "cfm", "gpm", "volume")),
    ("humidity", ("humidity", "humid", "moisture", "rh")),
    ("co2", ("co2", "carbon dioxide", "carbondioxide", "ppm")),
    ("power", ("power", "electric", "kw", "watt", "demand")),
    ("energy", ("energy", "kwh", "consumption", "usage")),
    ("speed", ("speed", "rpm", "frequency", "hz")),
    ("level", ("level", "position", "percent", "percentage", "opening")),
]
QUANTITY_KEYWORD_CONFIDENCE = 0.7

# Name substring -> (equipment marker bundle, confidence).  Compound keys
# precede the generic key they contain ("exhaustfan" before "fan").
EQUIPMENT_KEYWORDS: list[tuple[str, tuple[str, ...], float]] = [
    # Air handling
    ("ahu", ("ahu", "equip"), 0.95),
    ("rtu", ("rtu", "ahu", "equip"), 0.95),
    ("vav", ("vav", "equip"), 0.95),
    ("cav", ("cav", "equip"), 0.9),
    ("mau", ("mau", "ahu", "equip"), 0.9),
    ("erv", ("erv", "equip"), 0.9),
    ("hrv", ("hrv", "equip"), 0.9),
    # Plant
    ("chiller", ("chiller", "equip"), 0.95),
    ("boiler", ("boiler", "equip"), 0.95),
    ("coolingtower", ("coolingTower", "equip"), 0.95),
    ("heatpump", ("heatPump", "equip"), 0.95),
    ("furnace", ("furnace", "equip"), 0.9),
    ("unitheater", ("unitHeater", "equip"), 0.9),
    # Pumps and fans
    ("pump", ("pump", "equip"), 0.95),
    ("exhaustfan", ("exhaustFan", "fan", "equip"), 0.9),
    ("supplyfan", ("supplyFan", "fan", "equip"), 0.9),
    ("returnfan", ("returnFan", "fan", "equip"), 0.9),
    ("fan", ("fan", "equip"), 0.95),
    # Terminal units
    ("fcu", ("fcu", "equip"), 0.9),
    ("vrf", ("vrf", "equip"), 0.9),
    ("radiator", ("radiator", "equip"), 0.85),
    ("baseboard", ("baseboard", "equip"), 0.85),
    # Life safety
    ("firepanel", ("firePanel", "equip"), 0.9),
    ("securitypanel", ("securityPanel", "equip"), 0.9),
    # Electrical and lighting
    ("lightingpanel", ("lightingPanel", "equip"), 0.9),
    ("panel", ("elecPanel", "equip"), 0.9),
    ("meter", ("elecMeter", "equip"), 0.9),
    ("ups", ("ups", "equip"), 0.85),
    ("generator", ("generator", "equip"), 0.85),
    ("dimmer", ("dimmer", "equip"), 0.85),
    # Spelled-out and plant abbreviations
    ("air handler", ("ahu", "equip"), 0.85),
    ("air handling unit", ("ahu", "equip"), 0.85),
    ("variable air volume", ("vav", "equip"), 0.85),
    ("blower", ("fan", "equip"), 0.85),
    ("chw", ("chiller", "equip"), 0.85),
    ("hhw", ("boiler", "equip"), 0.85),
]

# Location marker -> name substrings that imply it
LOCATION_KEYWORDS: list[tuple[str, tuple[str, ...]]] = [
    ("zone", ("zone", "room", "space", "area")),
    ("discharge", ("discharge", "supply", "sup", "leaving")),
    ("return", ("return", "ret", "entering")),
    ("outside", ("outside", "outdoor", "oa", "oat", "external")),
    ("mixed", ("mixed", "mix", "ma", "mat")),
    ("exhaust", ("exhaust", "exh", "relief")),
    ("entering", ("entering", "inlet", "upstream")),
    ("leaving", ("leaving", "outlet", "downstream")),
]
LOCATION_KEYWORD_CONFIDENCE = 0.8

MARKER_PRIORITY: list[str] = [
    "point",
    "equip",
    "ahu", "vav", "fan", "pump", "chiller", "boiler",
    "sensor", "cmd", "sp",
    "temp", "pressure", "flow", "humidity", "co2", "power", "energy",
    "zone", "discharge", "return", "outside", "mixed",
    "run", "enable", "status", "alarm",
]
_PRIORITY_INDEX = {name: i for i, name in enumerate(MARKER_PRIORITY)}


def sort_markers(names: list[str]) -> list[str]:
    """Order marker names: priority list first, the rest alphabetically."""
    return sorted(
        names,
        key=lambda n: (0, _PRIORITY_INDEX[n], "") if n in _PRIORITY_INDEX else (1, 0, n.lower()),
    )

"""Marker vocabulary the compliance validator checks against."""

from __future__ import annotations

OFFICIAL_MARKERS: frozenset[str] = frozenset({
    # Core
    "point", "equip", "site", "space", "floor", "ref", "marker",
    # Point roles
    "sensor", "cmd", "sp", "setpoint",
    # Physical quantities
    "temp", "temperature", "pressure", "flow", "humidity", "power", "energy",
    "voltage", "current", "freq", "frequency", "co2", "co", "voc",
    # Equipment
    "ahu", "vav", "rtu", "chiller", "boiler", "pump", "fan", "humidifier",
    "dehumidifier", "fcu", "cuh", "uh", "coolingTower", "heatExchanger",
    "elecPanel", "elecMeter", "economizer",
    # Locations
    "zone", "discharge", "return", "outside", "mixed", "exhaust", "relief",
    "entering", "leaving", "supply", "coil", "filter", "damper", "valve",
    "duct", "pipe", "roof", "basement", "mechanical",
    # Systems
    "hvac", "elec", "water", "air", "hot", "chilled", "condenser",
    "cooling", "heating", "reheat",
    # Properties
    "writable", "analog", "binary", "enum", "run", "enable", "status",
    "alarm", "fault", "feedback", "position", "speed", "stage",
    # Units and qualifiers
    "fahrenheit", "celsius", "kelvin", "pascal", "percentage", "electric",
    "min", "max", "high", "low", "static", "differential",
    # Quality
    "concentration", "quality", "time", "level", "angle",
    # Equipment components
    "compressor", "evaporator", "burner", "flame",
    # Scheduling and control
    "schedule", "override", "manual", "auto",
})

DEPRECATED_MARKERS: frozenset[str] = frozenset({
    "bacnet", "vendor", "device", "network", "instance",
})

# Markers containing this separator are vendor-namespaced and exempt
VENDOR_NAMESPACE_SEPARATOR = ":"

ROLE_MARKERS: tuple[str, ...] = ("sensor", "cmd", "sp")

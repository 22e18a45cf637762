"""Classifier rule tables — vendor/model rules, prefix dictionary, name patterns.

The tables are plain module data so they can be reviewed and versioned on
their own; :func:`validate_tables` runs at import so a malformed edit fails
loudly instead of silently misclassifying.
"""

from __future__ import annotations

import re

# Tier 1: vendor -> [(model substring, equipment type)]
VENDOR_MODEL_RULES: dict[str, list[tuple[str, str]]] = {
    "ABB": [("ACH580", "VFD")],
    "Climate Master": [("ClimateMaster MPC", "WSHP")],
    "Distech Controls, Inc.": [
        ("ECB_600", "CONTROLLER"),
        ("ECB_300", "CONTROLLER"),
        ("ECB_203", "CONTROLLER"),
    ],
    "Danfoss Drives A/S": [("FC-102", "VFD")],
    "ARMSTRONG": [("DEPC", "PUMP_CONTROLLER")],
    "Sierra Monitor Corporation": [("ProtoCessor", "GATEWAY")],
    "Automated Logic Corporation": [("I/O Pro", "CONTROLLER")],
}

# Tier 2: name prefix -> equipment type
PREFIX_TYPES: dict[str, str] = {
    "AHU": "AHU",
    "RTU": "RTU",
    "VAV": "VAV",
    "VVR": "VAV",
    "VV": "VAV",
    "FCU": "FCU",
    "WSHP": "WSHP",
    "ASHP": "ASHP",
    "HP": "HEAT_PUMP",
    "EF": "EXHAUST_FAN",
    "SF": "SUPPLY_FAN",
    "RF": "RETURN_FAN",
    "CTF": "COOLING_TOWER_FAN",
    "CWP": "CHILLED_WATER_PUMP",
    "HWP": "HOT_WATER_PUMP",
    "CH": "CHILLER",
    "CHW": "CHILLER",
    "CHLR": "CHILLER",
    "BLR": "BOILER",
    "HHW": "BOILER",
    "CT": "COOLING_TOWER",
    "FPB": "FAN_POWERED_BOX",
    "FPTU": "FAN_POWERED_TERMINAL",
    "CAV": "CONSTANT_AIR_VOLUME",
    "ERV": "ENERGY_RECOVERY_VENTILATOR",
    "HRV": "HEAT_RECOVERY_VENTILATOR",
    "DOAS": "DOAS",
    "DOAU": "DOAU",
    "MAU": "MAKEUP_AIR_UNIT",
    "VFD": "VFD",
    "UH": "UNIT_HEATER",
    "ECB": "CONTROLLER",
}

# Tier 3: (pattern, equipment type, confidence), matched case-insensitively
NAME_PATTERNS: list[tuple[str, str, float]] = [
    # Air handling
    (r"^AHU[-_]?\d*$", "AHU", 0.9),
    (r"^AHU[-_]\d+[-_][A-Z]\d+$", "AHU", 0.9),
    (r"air.*handl", "AHU", 0.85),
    (r"^RTU[-_]?\d*$", "RTU", 0.9),
    (r"rooftop", "RTU", 0.85),
    (r"^VAV[-_]?\d*$", "VAV", 0.9),
    (r"^VVR[-_]\d+\.\d+$", "VAV", 0.95),
    (r"^VVR[-_]E\d+$", "VAV", 0.95),
    (r"^VV[-_]\d+[-_]R\d+$", "VAV", 0.95),
    (r"variable.*air.*volume", "VAV", 0.85),
    (r"^FCU[-_]?\d*$", "FCU", 0.9),
    (r"fan.*coil", "FCU", 0.85),
    (r"^L-\d+$", "LAB_AIR_VALVE", 0.95),
    (r"^L-\d+_L-\d+$", "LAB_AIR_VALVE", 0.95),
    # Heat pumps
    (r"^WSHP[-_]?", "WSHP", 0.95),
    (r"water.*source.*heat.*pump", "WSHP", 0.9),
    (r"^ASHP[-_]?\d*$", "ASHP", 0.9),
    (r"air.*source.*heat.*pump", "ASHP", 0.85),
    (r"^HP[-_]?\d*$", "HEAT_PUMP", 0.7),
    # Fans
    (r"^EF[-_]?\d+[A-Z]?$", "EXHAUST_FAN", 0.95),
    (r"^MISC\d+[-_]EF$", "EXHAUST_FAN", 0.95),
    (r"exhaust.*fan", "EXHAUST_FAN", 0.9),
    (r"^SF[-_]?\d*$", "SUPPLY_FAN", 0.9),
    (r"supply.*fan", "SUPPLY_FAN", 0.85),
    (r"^RF[-_]?\d*$", "RETURN_FAN", 0.9),
    (r"return.*fan", "RETURN_FAN", 0.85),
    (r"^CTF[-_]?\d*$", "COOLING_TOWER_FAN", 0.95),
    (r"cooling.*tower.*fan", "COOLING_TOWER_FAN", 0.9),
    # Pumps
    (r"^CWP[-_]?\d*$", "CHILLED_WATER_PUMP", 0.9),
    (r"chill.*water.*pump", "CHILLED_WATER_PUMP", 0.85),
    (r"^HWP[-_]?\d*$", "HOT_WATER_PUMP", 0.9),
    (r"hot.*water.*pump", "HOT_WATER_PUMP", 0.85),
    (r"loop.*water.*pump", "LOOP_WATER_PUMP", 0.95),
    (r"tower.*water.*pump", "TOWER_WATER_PUMP", 0.95),
    (r"condenser.*water.*pump", "CONDENSER_WATER_PUMP", 0.9),
    # Plant
    (r"^CH[-_]?\d*$", "CHILLER", 0.9),
    (r"^CHW[-_]?\d*$", "CHILLER", 0.95),
    (r"chiller", "CHILLER", 0.95),
    (r"^BLR[-_]?\d*$", "BOILER", 0.9),
    (r"^HHW[-_]?\d*$", "BOILER", 0.95),
    (r"boiler", "BOILER", 0.95),
    (r"master.*boiler.*controller", "BOILER_CONTROLLER", 0.95),
    (r"^CT[-_]?\d*$", "COOLING_TOWER", 0.9),
    (r"cooling.*tower", "COOLING_TOWER", 0.95),
    (r"^UH[-_]\d+$", "UNIT_HEATER", 0.9),
    # Terminal units
    (r"^FPB[-_]?\d*$", "FAN_POWERED_BOX", 0.9),
    (r"fan.*power.*box", "FAN_POWERED_BOX", 0.85),
    (r"^FPTU[-_]?\d*$", "FAN_POWERED_TERMINAL", 0.9),
    (r"^CAV[-_]?\d*$", "CONSTANT_AIR_VOLUME", 0.9),
    # Heat recovery and outdoor air
    (r"^ERV[-_]?\d*$", "ENERGY_RECOVERY_VENTILATOR", 0.9),
    (r"energy.*recovery", "ENERGY_RECOVERY_VENTILATOR", 0.85),
    (r"^HRV[-_]?\d*$", "HEAT_RECOVERY_VENTILATOR", 0.9),
    (r"heat.*recovery", "HEAT_RECOVERY_VENTILATOR", 0.85),
    (r"^DOAS[-_]?\d*$", "DOAS", 0.95),
    (r"^DOAU[-_]?\d*$", "DOAU", 0.95),
    (r"dedicated.*outdoor", "DOAS", 0.9),
    (r"^MAU[-_]?\d*$", "MAKEUP_AIR_UNIT", 0.9),
    (r"makeup.*air", "MAKEUP_AIR_UNIT", 0.85),
    # Controllers and drives
    (r"controller", "CONTROLLER", 0.8),
    (r"^ECB[-_]?\d*", "CONTROLLER", 0.85),
    (r"loop.*controller", "LOOP_CONTROLLER", 0.9),
    (r"^VFD[-_]?\d*$", "VFD", 0.9),
    (r"variable.*frequency", "VFD", 0.85),
    (r"ac.*drive", "VFD", 0.8),
    # Generic, low confidence
    (r"unit", "UNIT", 0.3),
    (r"system", "SYSTEM", 0.3),
]

DISPLAY_NAMES: dict[str, str] = {
    "AHU": "Air Handling Unit",
    "RTU": "Rooftop Unit",
    "VAV": "Variable Air Volume Box",
    "FCU": "Fan Coil Unit",
    "LAB_AIR_VALVE": "Lab Air Valve",
    "WSHP": "Water Source Heat Pump",
    "ASHP": "Air Source Heat Pump",
    "HEAT_PUMP": "Heat Pump",
    "EXHAUST_FAN": "Exhaust Fan",
    "SUPPLY_FAN": "Supply Fan",
    "RETURN_FAN": "Return Fan",
    "COOLING_TOWER_FAN": "Cooling Tower Fan",
    "CHILLED_WATER_PUMP": "Chilled Water Pump",
    "HOT_WATER_PUMP": "Hot Water Pump",
    "LOOP_WATER_PUMP": "Loop Water Pump",
    "TOWER_WATER_PUMP": "Tower Water Pump",
    "CONDENSER_WATER_PUMP": "Condenser Water Pump",
    "CHILLER": "Chiller",
    "BOILER": "Boiler",
    "BOILER_CONTROLLER": "Boiler Controller",
    "COOLING_TOWER": "Cooling Tower",
    "UNIT_HEATER": "Unit Heater",
    "FAN_POWERED_BOX": "Fan Powered Box",
    "FAN_POWERED_TERMINAL": "Fan Powered Terminal Unit",
    "CONSTANT_AIR_VOLUME": "Constant Air Volume Box",
    "ENERGY_RECOVERY_VENTILATOR": "Energy Recovery Ventilator",
    "HEAT_RECOVERY_VENTILATOR": "Heat Recovery Ventilator",
    "DOAS": "Dedicated Outdoor Air System",
    "DOAU": "Dedicated Outdoor Air Unit",
    "MAKEUP_AIR_UNIT": "Makeup Air Unit",
    "CONTROLLER": "Controller",
    "LOOP_CONTROLLER": "Loop Controller",
    "VFD": "Variable Frequency Drive",
    "PUMP_CONTROLLER": "Pump Controller",
    "GATEWAY": "Protocol Gateway",
    "UNIT": "Generic Unit",
    "SYSTEM": "System",
    "Unknown": "Unknown Equipment",
}


def _check_confidence(label: str, confidence: float) -> None:
    if not 0.0 <= confidence <= 1.0:
        raise ValueError(f"{label}: confidence {confidence} is outside [0, 1]")


def validate_tables(
    vendor_rules: dict[str, list[tuple[str, str]]] | None = None,
    prefixes: dict[str, str] | None = None,
    patterns: list[tuple[str, str, float]] | None = None,
) -> None:
    """Check the classifier tables for duplicates, blanks and bad confidences.

    Defaults to the module tables.  Raises ``ValueError`` on the first
    problem found.
    """
    vendor_rules = VENDOR_MODEL_RULES if vendor_rules is None else vendor_rules
    prefixes = PREFIX_TYPES if prefixes is None else prefixes
    patterns = NAME_PATTERNS if patterns is None else patterns

    for vendor, rules in vendor_rules.items():
        seen: set[str] = set()
        for model, equipment_type in rules:
            if not model or not equipment_type:
                raise ValueError(f"Vendor rule for {vendor!r} has an empty model or type")
            if model in seen:
                raise ValueError(f"Duplicate model {model!r} for vendor {vendor!r}")
            seen.add(model)

    upper_keys: set[str] = set()
    for prefix, equipment_type in prefixes.items():
        if not prefix or not equipment_type:
            raise ValueError("Prefix dictionary has an empty key or type")
        if prefix.upper() in upper_keys:
            raise ValueError(f"Duplicate prefix {prefix!r}")
        upper_keys.add(prefix.upper())

    seen_patterns: set[str] = set()
    for pattern, equipment_type, confidence in patterns:
        if not pattern or not equipment_type:
            raise ValueError("Name pattern table has an empty pattern or type")
        if pattern in seen_patterns:
            raise ValueError(f"Duplicate name pattern {pattern!r}")
        seen_patterns.add(pattern)
        _check_confidence(pattern, confidence)
        try:
            re.compile(pattern)
        except re.error as exc:
            raise ValueError(f"Invalid name pattern {pattern!r}: {exc}") from exc


def compile_patterns(
    patterns: list[tuple[str, str, float]],
) -> list[tuple[re.Pattern[str], str, float]]:
    """Compile a pattern table case-insensitively, preserving its order."""
    return [(re.compile(p, re.I), t, c) for p, t, c in patterns]


validate_tables()

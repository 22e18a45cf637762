"""Acronym dictionary — priority-ranked expansions for BACnet point-name tokens.

Each row is ``(acronym, expansion, category, priority, tags, point function)``.
Priority runs 1-10 and becomes the token confidence (``priority / 10``) when
the acronym matches.  Lookups are case-insensitive.
"""

from __future__ import annotations

import logging
from typing import Iterable

from pydantic import BaseModel, Field

from trionorm.normalization.models import PointFunction

logger = logging.getLogger(__name__)

_S = PointFunction.SENSOR
_SP = PointFunction.SETPOINT
_C = PointFunction.COMMAND
_ST = PointFunction.STATUS

_RAW_ACRONYMS: list[tuple[str, str, str, int, tuple[str, ...], PointFunction | None]] = [
    # High priority, specific
    ("SAT", "Supply Air Temperature", "Temperature", 10, ("supply", "air", "temp"), _S),
    ("RAT", "Return Air Temperature", "Temperature", 10, ("return", "air", "temp"), _S),
    ("OAT", "Outside Air Temperature", "Temperature", 10, ("outside", "air", "temp"), _S),
    ("MAT", "Mixed Air Temperature", "Temperature", 10, ("mixed", "air", "temp"), _S),
    # Point functions
    ("CMD", "Command", "Control", 9, ("cmd",), _C),
    ("CMND", "Command", "Control", 9, ("cmd",), _C),
    ("SP", "Setpoint", "Control", 9, ("sp",), _SP),
    ("SPT", "Setpoint", "Control", 9, ("sp",), _SP),
    ("SETPT", "Setpoint", "Control", 9, ("sp",), _SP),
    ("STPT", "Setpoint", "Control", 9, ("sp",), _SP),
    ("ST", "Status", "Status", 9, ("status",), _ST),
    ("STS", "Status", "Status", 9, ("status",), _ST),
    ("STAT", "Status", "Status", 9, ("status",), _ST),
    ("SEN", "Sensor", "Sensor", 9, ("sensor",), _S),
    ("SENS", "Sensor", "Sensor", 9, ("sensor",), _S),
    ("FB", "Feedback", "Sensor", 9, ("sensor", "feedback"), _S),
    ("CSAT", "Cooling Supply Air Temperature", "Temperature", 9, ("cool", "supply", "air", "temp"), None),
    ("MAT1", "Mixed Air Temperature 1", "Temperature", 9, ("mixed", "air", "temp"), _S),
    ("RAT1", "Return Air Temperature 1", "Temperature", 9, ("return", "air", "temp"), _S),
    ("SAT1", "Supply Air Temperature 1", "Temperature", 9, ("supply", "air", "temp"), _S),
    # Temperature
    ("TEMP", "Temperature", "Temperature", 8, ("temp",), None),
    ("TMP", "Temperature", "Temperature", 8, ("temp",), None),
    ("TEMPERATURE", "Temperature", "Temperature", 8, ("temp",), None),
    ("ZTMP", "Zone Temperature", "Temperature", 8, ("zone", "temp"), None),
    ("ZST", "Zone Sensor Temperature", "Temperature", 8, ("zone", "sensor", "temp"), None),
    ("T", "Temperature", "Temperature", 5, ("temp",), None),
    # Components and state
    ("DMPR", "Damper", "Equipment", 8, ("damper",), None),
    ("DMP", "Damper", "Equipment", 8, ("damper",), None),
    ("DAMPER", "Damper", "Equipment", 8, ("damper",), None),
    ("POS", "Position", "State", 8, ("position",), None),
    ("VLV", "Valve", "Equipment", 8, ("valve",), None),
    ("FAN", "Fan", "Equipment", 8, ("fan",), None),
    ("SPD", "Speed", "State", 8, ("speed",), None),
    ("FLOW", "Flow", "Measurement", 8, ("flow",), None),
    ("FLO", "Flow", "Measurement", 8, ("flow",), None),
    ("AIRFLOW", "Airflow", "Measurement", 8, ("air", "flow"), None),
    ("PWR", "Power", "Measurement", 8, ("power",), None),
    ("FREQ", "Frequency", "Measurement", 7, ("freq",), None),
    # Substances
    ("SA", "Supply Air", "Substance", 7, ("supply", "air"), None),
    ("RA", "Return Air", "Substance", 7, ("return", "air"), None),
    ("OA", "Outside Air", "Substance", 7, ("outside", "air"), None),
    ("OSA", "Outside Air", "Substance", 7, ("outside", "air"), None),
    ("MA", "Mixed Air", "Substance", 7, ("mixed", "air"), None),
    ("EA", "Exhaust Air", "Substance", 7, ("exhaust", "air"), None),
    ("DA", "Discharge Air", "Substance", 7, ("discharge", "air"), None),
    ("CHW", "Chilled Water", "Substance", 8, ("chilled", "water"), None),
    ("HW", "Hot Water", "Substance", 8, ("hot", "water"), None),
    ("EXHAUST", "Exhaust", "Substance", 7, ("exhaust",), None),
    ("RET", "Return", "Substance", 7, ("return",), None),
    # Locations
    ("ZN", "Zone", "Location", 8, ("zone",), None),
    ("ZONE", "Zone", "Location", 8, ("zone",), None),
    ("Z1", "Zone 1", "Location", 8, ("zone",), None),
    ("Z2", "Zone 2", "Location", 8, ("zone",), None),
    ("ZN1", "Zone 1", "Location", 8, ("zone",), None),
    ("ZN2", "Zone 2", "Location", 8, ("zone",), None),
    ("RM", "Room", "Location", 8, ("room",), None),
    ("ROOM", "Room", "Location", 8, ("room",), None),
    ("SPACE", "Space", "Location", 7, ("space",), None),
    ("BLDG", "Building", "Location", 7, ("building",), None),
    ("THTR", "Theatre", "Location", 7, ("theatre",), None),
    # Measurements
    ("OCC", "Occupancy", "State", 7, ("occ",), _ST),
    ("UNOCC", "Unoccupied", "State", 7, ("unoccupied",), None),
    ("RH", "Relative Humidity", "Measurement", 7, ("humidity", "rh"), _S),
    ("CO2", "CO2", "Measurement", 7, ("co2",), _S),
    ("ZCO2", "Zone CO2", "Measurement", 8, ("zone", "co2"), None),
    ("PRESS", "Pressure", "Measurement", 7, ("press",), _S),
    ("STATIC", "Static", "Measurement", 7, ("static",), None),
    ("BSP", "Building Static Pressure", "Pressure", 8, ("building", "static", "press"), None),
    ("DPSP", "Duct Pressure Setpoint", "Pressure", 8, ("duct", "press", "sp"), None),
    ("SSP", "Static Pressure Setpoint", "Pressure", 8, ("static", "press", "sp"), None),
    ("RNTM", "Runtime", "Measurement", 7, ("runtime",), None),
    ("TIME", "Time", "Measurement", 6, ("time",), None),
    # Alarms and status
    ("ALARM", "Alarm", "Status", 8, ("alarm",), _ST),
    ("ALM1", "Alarm 1", "Status", 7, ("alarm",), _ST),
    ("ALM2", "Alarm 2", "Status", 7, ("alarm",), _ST),
    ("ALRM", "Alarm", "Status", 7, ("alarm",), _ST),
    ("FAIL", "Fail", "Status", 8, ("fail", "status"), _ST),
    ("SAFETY", "Safety", "Status", 8, ("safety", "status"), None),
    ("COMM", "Communication", "Status", 7, ("comm", "status"), None),
    ("DIRTY", "Dirty", "Status", 7, ("dirty", "status"), None),
    ("OK", "OK", "Status", 7, ("ok", "status"), None),
    ("SATISFIED", "Satisfied", "Status", 7, ("satisfied", "status"), None),
    ("S", "Status", "Status", 5, ("status",), None),
    ("FSDA1", "Fire Smoke Damper Alarm 1", "Status", 8, ("fire", "smoke", "damper", "alarm"), _ST),
    ("FSDA2", "Fire Smoke Damper Alarm 2", "Status", 8, ("fire", "smoke", "damper", "alarm"), _ST),
    ("FSDA3", "Fire Smoke Damper Alarm 3", "Status", 8, ("fire", "smoke", "damper", "alarm"), _ST),
    # Control
    ("ADJ", "Adjust", "Control", 6, ("adjust",), None),
    ("DCV", "Demand Controlled Ventilation", "Control", 8, ("demand", "control", "ventilation"), None),
    ("DISABLE", "Disable", "Control", 7, ("disable",), None),
    ("ENABLE", "Enable", "Control", 7, ("enable",), None),
    ("DMD", "Demand", "Control", 7, ("demand",), None),
    ("ECON", "Economizer", "Control", 8, ("economizer",), None),
    ("LOCK", "Lock", "Control", 7, ("lock",), None),
    ("LOOP", "Loop", "Control", 6, ("loop",), None),
    ("OUTPUT", "Output", "Control", 6, ("output",), None),
    ("OVRD", "Override", "Control", 8, ("override",), None),
    ("OVRDE", "Override", "Control", 8, ("override",), None),
    ("ZOVD", "Zone Override", "Control", 8, ("zone", "override"), None),
    ("PID", "PID", "Control", 7, ("pid", "control"), None),
    ("PIDOUT", "PID Output", "Control", 7, ("pid", "output"), None),
    ("PURGE", "Purge", "Control", 7, ("purge",), None),
    ("RELIEF", "Relief", "Control", 7, ("relief",), None),
    ("REQ", "Request", "Control", 7, ("request",), None),
    ("REQUEST", "Request", "Control", 7, ("request",), None),
    ("SCHEDULE", "Schedule", "Control", 7, ("schedule",), None),
    ("SELECT", "Select", "Control", 6, ("select",), None),
    ("SEQ", "Sequence", "Control", 6, ("sequence",), None),
    # Modes and states
    ("CL", "Cooling", "State", 8, ("cool",), None),
    ("CLG", "Cooling", "State", 8, ("cool",), None),
    ("COOL", "Cooling", "State", 8, ("cool",), None),
    ("CMODE", "Cooling Mode", "Mode", 7, ("cool", "mode"), None),
    ("HEAT", "Heating", "State", 8, ("heat",), None),
    ("HT", "Heating", "State", 8, ("heat",), None),
    ("HTG", "Heating", "State", 8, ("heat",), None),
    ("HMODE", "Heating Mode", "Mode", 7, ("heat", "mode"), None),
    ("HAND", "Hand", "Mode", 7, ("hand", "mode"), None),
    ("MAN", "Manual", "Mode", 7, ("manual", "mode"), None),
    ("WARMUP", "Warmup", "Mode", 7, ("warmup", "mode"), None),
    ("MODE", "Mode", "State", 7, ("mode",), None),
    ("HI", "High", "State", 7, ("high",), None),
    ("LO", "Low", "State", 7, ("low",), None),
    ("LOW", "Low", "State", 7, ("low",), None),
    ("MIN", "Minimum", "State", 7, ("min",), None),
    ("LIMIT", "Limit", "State", 7, ("limit",), None),
    ("OFF", "Off", "State", 7, ("off",), None),
    ("RUN", "Run", "State", 7, ("run",), None),
    ("RN", "Run", "State", 7, ("run",), None),
    ("STAGE", "Stage", "State", 7, ("stage",), None),
    ("STATE", "State", "State", 6, ("state",), None),
    ("CAPACITY", "Capacity", "State", 7, ("capacity",), None),
    ("EFF", "Effective", "State", 7, ("effective",), None),
    # Equipment
    ("CD", "Condenser", "Equipment", 7, ("condenser",), None),
    ("DOOR", "Door", "Equipment", 7, ("door",), None),
    ("DUCT", "Duct", "Equipment", 7, ("duct",), None),
    ("DX", "Direct Expansion", "Equipment", 8, ("dx", "equip"), None),
    ("DX1", "Direct Expansion Stage 1", "Equipment", 8, ("dx", "equip", "stage"), None),
    ("DX2", "Direct Expansion Stage 2", "Equipment", 8, ("dx", "equip", "stage"), None),
    ("EF", "Exhaust Fan", "Equipment", 8, ("exhaust", "fan", "equip"), None),
    ("EF1", "Exhaust Fan 1", "Equipment", 8, ("exhaust", "fan", "equip"), None),
    ("EF2", "Exhaust Fan 2", "Equipment", 8, ("exhaust", "fan", "equip"), None),
    ("FILTER", "Filter", "Equipment", 7, ("filter",), None),
    ("FSD1", "Fire Smoke Damper 1", "Equipment", 8, ("fire", "smoke", "damper", "equip"), None),
    ("FSD2", "Fire Smoke Damper 2", "Equipment", 8, ("fire", "smoke", "damper", "equip"), None),
    ("OAD", "Outside Air Damper", "Equipment", 8, ("outside", "air", "damper", "equip"), None),
    ("RAD", "Return Air Damper", "Equipment", 8, ("return", "air", "damper", "equip"), None),
    ("RD", "Return Damper", "Equipment", 8, ("return", "damper", "equip"), None),
    ("RF", "Return Fan", "Equipment", 8, ("return", "fan", "equip"), None),
    ("RFAN", "Return Fan", "Equipment", 8, ("return", "fan", "equip"), None),
    ("SF", "Supply Fan", "Equipment", 8, ("supply", "fan", "equip"), None),
    ("SF1", "Supply Fan 1", "Equipment", 8, ("supply", "fan", "equip"), None),
    ("SF2", "Supply Fan 2", "Equipment", 8, ("supply", "fan", "equip"), None),
    ("SVFD", "Supply VFD", "Equipment", 8, ("supply", "vfd", "equip"), None),
    ("VFD", "VFD", "Equipment", 8, ("vfd", "equip"), None),
    ("UNIT", "Unit", "Equipment", 7, ("unit",), None),
    # Sensors
    ("DETECT", "Detector", "Sensor", 7, ("detector",), None),
    ("SD", "Smoke Detector", "Sensor", 8, ("smoke", "detector"), None),
    ("SMOKE", "Smoke", "Sensor", 8, ("smoke",), None),
    ("ZS", "Zone Sensor", "Sensor", 8, ("zone", "sensor"), None),
    # Data, units, logic
    ("AVG", "Average", "Calculation", 6, ("average",), None),
    ("TOTAL", "Total", "Calculation", 6, ("total",), None),
    ("PCT", "Percent", "Unit", 6, ("percent",), None),
    ("PERCENT", "Percent", "Unit", 6, ("percent",), None),
    ("HRS", "Hours", "Unit", 6, ("hours",), None),
    ("TREND", "Trend", "Data", 5, ("trend",), None),
    ("TRN", "Trend", "Data", 5, ("trend",), None),
    ("LOG", "Log", "Data", 5, ("log",), None),
    ("VAL", "Value", "Data", 4, ("value",), None),
    ("SYS", "System", "System", 6, ("system",), None),
    ("AO", "Analog Output", "BACnet", 5, ("analog", "output"), None),
    ("IN", "Input", "Logic", 4, ("input",), None),
    ("INPUT", "Input", "Logic", 4, ("input",), None),
    ("FOR", "For", "Logic", 3, (), None),
    ("UP", "Up", "Direction", 4, (), None),
]


class AcronymEntry(BaseModel):
    """One row of the acronym dictionary."""

    acronym: str = Field(min_length=1)
    expansion: str = Field(min_length=1)
    category: str = ""
    priority: int = Field(ge=1, le=10)
    """Matching priority, 10 is strongest."""

    tags: list[str] = Field(default_factory=list)
    """Suggested semantic markers."""

    point_function: PointFunction | None = None
    """Function implied by the acronym, when it implies one."""

    @property
    def confidence(self) -> float:
        return self.priority / 10


DEFAULT_ACRONYMS: list[AcronymEntry] = [
    AcronymEntry(
        acronym=acronym,
        expansion=expansion,
        category=category,
        priority=priority,
        tags=list(tags),
        point_function=function,
    )
    for acronym, expansion, category, priority, tags, function in _RAW_ACRONYMS
]


class AcronymDictionary:
    """Case-insensitive acronym lookup over a validated entry list.

    Parameters
    ----------
    entries:
        Rows to index.  Defaults to :data:`DEFAULT_ACRONYMS`.

    Raises
    ------
    ValueError
        If two entries share an acronym (ignoring case).
    """

    def __init__(self, entries: Iterable[AcronymEntry] | None = None) -> None:
        self._entries: dict[str, AcronymEntry] = {}
        for entry in DEFAULT_ACRONYMS if entries is None else entries:
            key = entry.acronym.upper()
            if key in self._entries:
                raise ValueError(f"Duplicate acronym {entry.acronym!r}")
            self._entries[key] = entry
        logger.debug("Loaded %d acronyms", len(self._entries))

    def lookup(self, token: str) -> AcronymEntry | None:
        return self._entries.get(token.upper())

    def __contains__(self, token: object) -> bool:
        return isinstance(token, str) and token.upper() in self._entries

    def __len__(self) -> int:
        return len(self._entries)

"""Guess the controls vendor from point-naming conventions."""

from __future__ import annotations

# Checked in order; the first vendor with a matching fragment wins.
_VENDOR_NAME_HINTS: list[tuple[str, tuple[str, ...]]] = [
    ("Johnson Controls", ("znt", "znsp", "oatemp", "dmpr", "airflw")),
    ("Siemens", ("t_", "p_", "f_", "d_", "v_")),
    ("Trane", ("zonetemp", "supplytemp", "outdoortemp", "staticpress")),
    ("Honeywell", ("rmtemp", "sptemp", "airfl", "stpres")),
    ("Schneider Electric", ("_temp", "_press", "_flow", "_damper")),
]


def infer_vendor_from_name(name: str) -> str | None:
    """Return the vendor whose naming style *name* follows, or None."""
    lowered = name.lower()
    for vendor, fragments in _VENDOR_NAME_HINTS:
        if any(fragment in lowered for fragment in fragments):
            return vendor
    return None

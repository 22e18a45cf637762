"""Render a tagged point as trio or zinc text."""

from __future__ import annotations

from trionorm.normalization.models import NormalizedPoint


def _header(point: NormalizedPoint) -> tuple[str, str]:
    point_id = point.original_point_id or "point"
    dis = (point.normalized_name or point.original_name or "Unknown Point").replace('"', '\\"')
    return f"id:@{point_id}", f'dis:"{dis}"'


def to_trio(point: NormalizedPoint, markers: list[str] | None = None) -> str:
    """One trio record: id, display name, then one marker per line.

    *markers* defaults to ``point.haystack_tags``.
    """
    lines = [*_header(point), *(point.haystack_tags if markers is None else markers)]
    return "\n".join(lines) + "\n"


def to_zinc(point: NormalizedPoint, markers: list[str] | None = None) -> str:
    """Space-separated zinc-style tag list for *point*."""
    return " ".join([*_header(point), *(point.haystack_tags if markers is None else markers)])

"""Popup content for sighting markers.

Popup HTML is a pure function of the record: rendering the same record twice
gives the same markup, and a record whose address changed renders the new
address.

Example:
    >>> from datetime import UTC, datetime
    >>> from balloonspine.models import SightingRecord
    >>> from balloonspine.sync.popup import render_popup
    >>> record = SightingRecord(
    ...     id=1, lat=51.5, lng=-0.09, notes="test",
    ...     timestamp=datetime(2024, 5, 1, 14, 30, tzinfo=UTC),
    ... )
    >>> html = render_popup(record, tz=UTC)
    >>> "2024-05-01" in html and "14:30:00" in html
    True
    >>> 'data-sighting-id="1"' in html
    True
"""

from __future__ import annotations

from datetime import tzinfo
from html import escape

from balloonspine.models.sighting import SightingRecord

POPUP_TITLE = "Balloon Canister Sighting"
DELETE_ACTION = "delete"

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"


def render_popup(record: SightingRecord, tz: tzinfo | None = None) -> str:
    """Build the popup HTML for a record.

    Args:
        record: The sighting to describe.
        tz: Timezone for the date and time lines (default: local time).
    """
    created = record.created_at.astimezone(tz)
    parts = [
        '<div class="sighting-popup" style="min-width: 200px;">',
        f"<h4>{POPUP_TITLE}</h4>",
        f"<p><strong>Date:</strong> {created.strftime(DATE_FORMAT)}</p>",
        f"<p><strong>Time:</strong> {created.strftime(TIME_FORMAT)}</p>",
        f"<p><strong>Location:</strong> {escape(record.address)}</p>",
    ]
    if record.notes:
        parts.append(f"<p><strong>Notes:</strong> {escape(record.notes)}</p>")
    # Only inline images; anything else would make the popup fetch a URL.
    if record.image and record.image.startswith("data:image/"):
        parts.append(
            f'<img src="{escape(record.image, quote=True)}" alt="Sighting photo" '
            'style="max-width: 200px; max-height: 200px; margin-top: 10px;">'
        )
    parts.append(
        f'<button class="sighting-delete" data-action="{DELETE_ACTION}" '
        f'data-sighting-id="{record.id}">Delete</button>'
    )
    parts.append("</div>")
    return "\n".join(parts)

"""Tests for MarkerSynchronizer and popup rendering."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest
from conftest import make_record

from balloonspine.core.exceptions import MapSurfaceUnavailableError
from balloonspine.models.sighting import PENDING_ADDRESS
from balloonspine.surface.memory import MemoryMapSurface
from balloonspine.sync.markers import MarkerSynchronizer
from balloonspine.sync.popup import DELETE_ACTION, render_popup

# =============================================================================
# Popup content
# =============================================================================


class TestRenderPopup:
    """Popup HTML is derived from the record's current fields."""

    def test_contains_date_time_and_address(self) -> None:
        """Date, time and address are shown."""
        html = render_popup(make_record(1), tz=UTC)

        assert "Balloon Canister Sighting" in html
        assert "2024-05-01" in html
        assert "14:30:00" in html
        assert PENDING_ADDRESS in html

    def test_notes_only_when_present(self) -> None:
        """The notes line is omitted for empty notes."""
        assert "Notes:" in render_popup(make_record(1, notes="near the bridge"), tz=UTC)
        assert "Notes:" not in render_popup(make_record(1, notes=""), tz=UTC)

    def test_embeds_data_uri_image(self) -> None:
        """Inline photos are embedded."""
        html = render_popup(make_record(1, image="data:image/jpeg;base64,AAAA"), tz=UTC)
        assert '<img src="data:image/jpeg;base64,AAAA"' in html

    def test_skips_non_data_image(self) -> None:
        """Remote image URLs are not embedded."""
        html = render_popup(make_record(1, image="https://example.com/x.png"), tz=UTC)
        assert "<img" not in html

    def test_escapes_user_text(self) -> None:
        """Notes and address cannot inject markup."""
        record = make_record(1, notes="<script>alert(1)</script>")
        record.address = "<b>Main St</b>"

        html = render_popup(record, tz=UTC)

        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "&lt;b&gt;Main St&lt;/b&gt;" in html

    def test_delete_affordance_keyed_by_id(self) -> None:
        """The delete button carries the record id."""
        html = render_popup(make_record(1714573800000), tz=UTC)
        assert f'data-action="{DELETE_ACTION}"' in html
        assert 'data-sighting-id="1714573800000"' in html

    def test_uses_requested_timezone(self) -> None:
        """Dates are shown in the requested zone."""
        record = make_record(1, timestamp=datetime(2024, 5, 1, 23, 30, tzinfo=UTC))
        html = render_popup(record, tz=timezone(timedelta(hours=2)))
        assert "2024-05-02" in html
        assert "01:30:00" in html


# =============================================================================
# Synchronizer
# =============================================================================


class TestMarkerSynchronizerRender:
    """render_one() / render_all()."""

    def test_render_one_adds_marker_with_popup(
        self, synchronizer: MarkerSynchronizer, surface: MemoryMapSurface
    ) -> None:
        """One marker at the record's coordinate, with its popup."""
        handle = synchronizer.render_one(make_record(1))

        assert surface.positions() == [(51.505, -0.09)]
        assert PENDING_ADDRESS in surface.popup(handle)
        assert synchronizer.marker_ids() == [1]

    def test_render_one_twice_rejected(self, synchronizer: MarkerSynchronizer) -> None:
        """A record never gets a second marker."""
        synchronizer.render_one(make_record(1))
        with pytest.raises(ValueError):
            synchronizer.render_one(make_record(1))
        assert len(synchronizer) == 1

    def test_render_all_follows_order(self, synchronizer: MarkerSynchronizer) -> None:
        """Markers are created in the supplied order."""
        synchronizer.render_all([make_record(3), make_record(1), make_record(2)])
        assert synchronizer.marker_ids() == [3, 1, 2]

    def test_render_all_clears_previous_markers(
        self, synchronizer: MarkerSynchronizer, surface: MemoryMapSurface
    ) -> None:
        """A bulk render never leaves duplicate markers."""
        synchronizer.render_all([make_record(1), make_record(2)])
        synchronizer.render_all([make_record(2)])

        assert synchronizer.marker_ids() == [2]
        assert len(surface.markers) == 1

    def test_surface_failure_propagates(self, surface: MemoryMapSurface) -> None:
        """Without a working surface, rendering fails loudly."""
        surface.available = False
        synchronizer = MarkerSynchronizer(surface)

        with pytest.raises(MapSurfaceUnavailableError):
            synchronizer.render_one(make_record(1))
        assert len(synchronizer) == 0


class TestMarkerSynchronizerRemove:
    """remove_one() / remove_all()."""

    def test_remove_one(self, synchronizer: MarkerSynchronizer, surface: MemoryMapSurface) -> None:
        """Only the given record's marker is removed."""
        synchronizer.render_all([make_record(1), make_record(2)])

        assert synchronizer.remove_one(1) is True

        assert synchronizer.marker_ids() == [2]
        assert len(surface.markers) == 1

    def test_remove_one_missing(self, synchronizer: MarkerSynchronizer) -> None:
        """Removing an unknown id is a no-op."""
        assert synchronizer.remove_one(42) is False

    def test_remove_all(self, synchronizer: MarkerSynchronizer, surface: MemoryMapSurface) -> None:
        """Every marker is detached and bookkeeping cleared."""
        synchronizer.render_all([make_record(1), make_record(2)])

        synchronizer.remove_all()

        assert synchronizer.marker_ids() == []
        assert surface.markers == {}


class TestMarkerSynchronizerPopupRefresh:
    """refresh_popup() re-binds content after enrichment."""

    def test_refresh_shows_new_address(
        self, synchronizer: MarkerSynchronizer, surface: MemoryMapSurface
    ) -> None:
        """The pending label is replaced, not cached."""
        record = make_record(1)
        handle = synchronizer.render_one(record)
        record.address = "10 Downing St, London"

        assert synchronizer.refresh_popup(record) is True

        assert "10 Downing St, London" in surface.popup(handle)
        assert PENDING_ADDRESS not in surface.popup(handle)

    def test_refresh_without_marker(self, synchronizer: MarkerSynchronizer) -> None:
        """Refreshing a record with no marker does nothing."""
        assert synchronizer.refresh_popup(make_record(1)) is False


class TestMarkerSynchronizerDeleteHandler:
    """Per-marker delete handlers."""

    async def test_delete_action_calls_handler_with_id(self, surface: MemoryMapSurface) -> None:
        """Each marker's delete affordance reports its own id."""
        deleted: list[int] = []
        synchronizer = MarkerSynchronizer(surface, on_delete=deleted.append)
        first = synchronizer.render_one(make_record(1))
        second = synchronizer.render_one(make_record(2))

        await surface.trigger(second, DELETE_ACTION)
        await surface.trigger(first, DELETE_ACTION)

        assert deleted == [2, 1]

    def test_no_handler_no_action(self, synchronizer: MarkerSynchronizer, surface: MemoryMapSurface) -> None:
        """Without a handler no action is bound."""
        handle = synchronizer.render_one(make_record(1))
        assert surface.markers[handle].actions == {}

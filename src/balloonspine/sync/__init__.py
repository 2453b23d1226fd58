"""Marker synchronization between the record store and the map."""

from balloonspine.sync.markers import DeleteHandler, MarkerSynchronizer
from balloonspine.sync.popup import DELETE_ACTION, render_popup

__all__ = ["DELETE_ACTION", "DeleteHandler", "MarkerSynchronizer", "render_popup"]

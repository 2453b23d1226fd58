"""Base models and shared types.

Example:
    >>> from balloonspine.models.base import BalloonSpineModel
    >>> BalloonSpineModel.model_config["validate_assignment"]
    True
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BalloonSpineModel(BaseModel):
    """Base model with standard configuration.

    Unknown fields are ignored so that snapshots written by older or newer
    versions still load.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        validate_assignment=True,
        extra="ignore",
    )

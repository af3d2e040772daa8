"""Bundle component tag models for wristpack.

Upstream build steps attach a tag to each compiled bundle describing what
kind of component it is. This module defines the closed set of tag shapes
as a discriminated union on the ``type`` field:

- DeviceBundleTag: a bundle that runs on a device family
- CompanionBundleTag: the bundle that runs on the paired phone
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Discriminator, Field, TypeAdapter

# Tags come from other tooling; unknown keys are ignored but known keys are
# checked without coercion.
_TAG_CONFIG = ConfigDict(frozen=True, extra="ignore", strict=True, populate_by_name=True)


class DeviceBundleTag(BaseModel):
    """Tag for a device bundle.

    Attributes:
        type: Tag discriminator, always "device".
        family: Device family the bundle was built for.
        platform: Platform identifiers the bundle targets, in declared order.
        is_native: True for native bundles, False for JS bundles.

    Example:
        >>> tag = DeviceBundleTag(family="ionic", platform=["ionic"])
        >>> tag.is_native
        False
    """

    model_config = _TAG_CONFIG

    type: Literal["device"] = Field(
        default="device",
        description="Tag discriminator",
    )
    family: str = Field(
        ...,
        description="Device family the bundle was built for",
    )
    platform: list[str] = Field(
        ...,
        description="Platforms the bundle targets",
    )
    is_native: bool = Field(
        default=False,
        alias="isNative",
        description="Whether the bundle contains native code",
    )


class CompanionBundleTag(BaseModel):
    """Tag for the companion bundle.

    Attributes:
        type: Tag discriminator, always "companion".
    """

    model_config = _TAG_CONFIG

    type: Literal["companion"] = Field(
        default="companion",
        description="Tag discriminator",
    )


BundleTag = Annotated[
    DeviceBundleTag | CompanionBundleTag,
    Discriminator("type"),
]
"""Bundle component tag with discriminated union for device and companion bundles."""

BUNDLE_TAG_ADAPTER: TypeAdapter[DeviceBundleTag | CompanionBundleTag] = TypeAdapter(BundleTag)
"""Validator for raw tag attachments."""

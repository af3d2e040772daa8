"""Bundle tag validation.

Validation never raises: callers get either the normalized tag or a
ValidationError instance describing every violated field, and decide
themselves whether to raise it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

from wristpack_core.errors import ValidationError
from wristpack_core.schemas.bundle_tag import (
    BUNDLE_TAG_ADAPTER,
    CompanionBundleTag,
    DeviceBundleTag,
)

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails


def _format_violation(error: ErrorDetails) -> str:
    loc = ".".join(str(part) for part in error["loc"])
    if not loc:
        loc = "type" if error["type"].startswith("union_tag") else "value"
    return f"{loc}: {error['msg']}"


def validate_bundle_tag(
    raw_tag: Any,
    file_identity: str,
) -> DeviceBundleTag | CompanionBundleTag | ValidationError:
    """Validate a raw bundle tag attachment.

    Args:
        raw_tag: The value attached to the artifact.
        file_identity: Relative path of the artifact, for diagnostics.

    Returns:
        The validated tag, or a ValidationError listing every violation.

    Example:
        >>> validate_bundle_tag({"type": "companion"}, "companion.zip")
        CompanionBundleTag(type='companion')
        >>> result = validate_bundle_tag({"type": "watch"}, "x.zip")
        >>> isinstance(result, ValidationError)
        True
    """
    try:
        return BUNDLE_TAG_ADAPTER.validate_python(raw_tag)
    except PydanticValidationError as e:
        return ValidationError(
            file_path=file_identity,
            violations=[_format_violation(error) for error in e.errors()],
        )

"""Custom exception hierarchy for wristpack-core.

This module defines the exception classes raised by the manifest stage:
- WristpackError: Base exception for all wristpack-related errors
- ValidationError: Raised when a bundle component tag is malformed
- MixedComponentTypeError: Raised when native and JS device bundles meet
- DuplicateComponentError: Raised when two bundles claim the same slot
- SourceMapKeyError: Raised when a source map key is malformed
- LifecycleError: Raised when the stage is driven out of order
- VersionResolutionError: Raised when no API version mapping exists
- ConfigurationError: Raised when project configuration cannot be used

All of them are fatal to the manifest stage. User-facing messages name the
offending artifact(s); technical details are logged internally via structlog.
"""

from __future__ import annotations

import structlog

logger = structlog.get_logger(__name__)


class WristpackError(Exception):
    """Base exception for wristpack.

    All wristpack exceptions inherit from this class. User-facing messages
    are safe to display; technical details are logged internally.

    Args:
        user_message: Message to display to the user.
        internal_details: Optional technical details for logging. This is
            logged internally but never added to the user message.

    Example:
        >>> raise WristpackError(
        ...     "Manifest generation failed",
        ...     internal_details="watch table was empty at finalize",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "wristpack_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


def _with_file(message: str, file_path: str | None) -> str:
    if file_path:
        return f"{message} (in {file_path})"
    return message


class ValidationError(WristpackError):
    """Raised when a bundle component tag fails validation.

    The tag attached to an artifact must be either a device tag or a
    companion tag. Every violated field is listed so that the build log
    points straight at the broken metadata.

    Attributes:
        file_path: Relative path of the artifact carrying the tag.
        violations: One ``"<field>: <problem>"`` entry per violated field.

    Example:
        >>> raise ValidationError(
        ...     file_path="device-ionic.zip",
        ...     violations=["device.family: Field required"],
        ... )
        # User sees: "Unknown bundle component tag: device.family: Field required
        #            (in device-ionic.zip)"
    """

    def __init__(
        self,
        *,
        file_path: str | None = None,
        violations: list[str] | None = None,
        internal_details: str | None = None,
    ) -> None:
        self.file_path = file_path
        self.violations = list(violations or [])

        detail = "\n".join(self.violations) if self.violations else "unrecognized value"
        super().__init__(
            _with_file(f"Unknown bundle component tag: {detail}", file_path),
            internal_details=internal_details,
        )


class MixedComponentTypeError(WristpackError):
    """Raised when native and JS device bundles are part of one build.

    Attributes:
        file_path: Relative path of the artifact that introduced the conflict.
    """

    def __init__(self, file_path: str, *, internal_details: str | None = None) -> None:
        self.file_path = file_path
        super().__init__(
            _with_file("Cannot bundle mixed native/JS device components", file_path),
            internal_details=internal_details,
        )


class DuplicateComponentError(WristpackError):
    """Raised when two bundles register the same component slot.

    A slot is either a device family (``device/<family>``) or the single
    companion slot (``companion``).

    Attributes:
        component: Slot description, e.g. ``"device/ionic"`` or ``"companion"``.
        file_path: Relative path of the artifact processed second.
        existing_path: Relative path of the artifact already registered.

    Example:
        >>> raise DuplicateComponentError(
        ...     component="device/ionic",
        ...     file_path="b/device.zip",
        ...     existing_path="a/device.zip",
        ... )
        # User sees: "Duplicate device/ionic component bundles: b/device.zip / a/device.zip"
    """

    def __init__(
        self,
        *,
        component: str,
        file_path: str,
        existing_path: str,
        internal_details: str | None = None,
    ) -> None:
        self.component = component
        self.file_path = file_path
        self.existing_path = existing_path
        super().__init__(
            f"Duplicate {component} component bundles: {file_path} / {existing_path}",
            internal_details=internal_details,
        )


class SourceMapKeyError(WristpackError):
    """Raised when a source map key has an empty segment.

    Attributes:
        key: The dot-delimited key as attached to the artifact.
        file_path: Relative path of the source map artifact.
    """

    def __init__(
        self,
        key: str,
        file_path: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        self.key = key
        self.file_path = file_path
        super().__init__(
            _with_file(f"Invalid source map key '{key}'", file_path),
            internal_details=internal_details,
        )


class LifecycleError(WristpackError):
    """Raised when the manifest stage is used outside its allowed state.

    Attributes:
        operation: The operation that was attempted (``ingest``, ``finalize``).
        state: Name of the state the stage was in.
    """

    def __init__(
        self,
        operation: str,
        state: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        self.operation = operation
        self.state = state
        super().__init__(
            f"Cannot {operation} manifest stage in state '{state}'",
            internal_details=internal_details,
        )


class VersionResolutionError(WristpackError):
    """Raised when a toolchain version has no known API version mapping.

    Attributes:
        version: The toolchain version string exactly as configured.
    """

    def __init__(self, version: str, *, internal_details: str | None = None) -> None:
        self.version = version
        super().__init__(
            f"No known API version mapping for toolchain version '{version}'",
            internal_details=internal_details,
        )


class ConfigurationError(WristpackError):
    """Raised when project configuration parsing or validation fails.

    Provides file path and field context for actionable error messages.

    Attributes:
        file_path: Path to the configuration file (if known).
        field_path: Dot-separated path to the invalid field (e.g., "tiles.0.id").

    Example:
        >>> raise ConfigurationError(
        ...     "Invalid tile declaration",
        ...     file_path="wristpack.yaml",
        ...     field_path="tiles.0.id",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        file_path: str | None = None,
        field_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        context_parts: list[str] = []
        if file_path:
            context_parts.append(f"in {file_path}")
        if field_path:
            context_parts.append(f"field '{field_path}'")

        if context_parts:
            full_message = f"{user_message} ({', '.join(context_parts)})"
        else:
            full_message = user_message

        super().__init__(full_message, internal_details=internal_details)

        self.file_path = file_path
        self.field_path = field_path

"""Unit tests for ComponentAggregator."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import pytest

from wristpack_core.compat.sdk_version import ApiVersionResolver
from wristpack_core.errors import (
    DuplicateComponentError,
    LifecycleError,
    MixedComponentTypeError,
    SourceMapKeyError,
    ValidationError,
    VersionResolutionError,
)
from wristpack_core.manifest.aggregator import AggregatorState, ComponentAggregator
from wristpack_core.schemas import Artifact, ProjectConfig

BUILD_ID = "0x0123456789abcdef"

ArtifactFactory = Callable[..., Artifact]


@pytest.fixture
def aggregator(project_config: ProjectConfig) -> ComponentAggregator:
    return ComponentAggregator(project_config, BUILD_ID)


def _manifest(artifact: Artifact) -> dict[str, Any]:
    return json.loads(artifact.contents.decode("utf-8"))


class TestLifecycle:
    """Tests for the aggregator state machine."""

    def test_starts_empty(self, aggregator: ComponentAggregator) -> None:
        assert aggregator.state is AggregatorState.EMPTY

    def test_ingest_moves_to_accumulating(
        self,
        aggregator: ComponentAggregator,
        companion_artifact: ArtifactFactory,
    ) -> None:
        aggregator.ingest(companion_artifact())
        assert aggregator.state is AggregatorState.ACCUMULATING

    def test_untagged_artifact_moves_to_accumulating(
        self,
        aggregator: ComponentAggregator,
    ) -> None:
        aggregator.ingest(Artifact(relative="resources/icon.png"))
        assert aggregator.state is AggregatorState.ACCUMULATING

    def test_finalize_from_empty(self, aggregator: ComponentAggregator) -> None:
        manifest = aggregator.finalize()
        assert aggregator.state is AggregatorState.FINALIZED
        assert _manifest(manifest)["components"] == {}

    @pytest.mark.requirement("lifecycle-terminal")
    def test_ingest_after_finalize(
        self,
        aggregator: ComponentAggregator,
        companion_artifact: ArtifactFactory,
    ) -> None:
        aggregator.finalize()
        with pytest.raises(LifecycleError) as exc_info:
            aggregator.ingest(companion_artifact())
        assert exc_info.value.operation == "ingest"
        assert aggregator.components.companion is None

    def test_finalize_twice(self, aggregator: ComponentAggregator) -> None:
        aggregator.finalize()
        with pytest.raises(LifecycleError) as exc_info:
            aggregator.finalize()
        assert exc_info.value.operation == "finalize"
        assert exc_info.value.state == "finalized"

    def test_ingest_returns_artifact_unchanged(
        self,
        aggregator: ComponentAggregator,
        device_artifact: ArtifactFactory,
    ) -> None:
        artifact = device_artifact("ionic")
        assert aggregator.ingest(artifact) is artifact


class TestDeviceBundles:
    """Tests for device bundle registration."""

    def test_js_device_gets_capabilities(
        self,
        aggregator: ComponentAggregator,
        device_artifact: ArtifactFactory,
    ) -> None:
        aggregator.ingest(device_artifact("ionic"))
        component = aggregator.components.watch["ionic"]
        assert component.filename == "device-ionic.zip"
        assert component.platform == ["ionic"]
        assert component.supports == {"screenSize": {"w": 348, "h": 250}}
        assert aggregator.components.has_js is True
        assert aggregator.components.has_native is False

    def test_native_device_has_no_capabilities(
        self,
        aggregator: ComponentAggregator,
        device_artifact: ArtifactFactory,
    ) -> None:
        aggregator.ingest(device_artifact("ionic", native=True))
        assert aggregator.components.watch["ionic"].supports is None
        assert aggregator.components.has_native is True

    def test_unknown_family_has_no_capabilities(
        self,
        aggregator: ComponentAggregator,
        device_artifact: ArtifactFactory,
    ) -> None:
        aggregator.ingest(device_artifact("atlas"))
        assert aggregator.components.watch["atlas"].supports is None

    def test_custom_capability_lookup(
        self,
        project_config: ProjectConfig,
        device_artifact: ArtifactFactory,
    ) -> None:
        calls: list[str] = []

        def lookup(family: str) -> dict[str, Any] | None:
            calls.append(family)
            return {"family": family}

        aggregator = ComponentAggregator(project_config, BUILD_ID, capabilities=lookup)
        aggregator.ingest(device_artifact("ionic"))
        aggregator.ingest(device_artifact("versa"))
        assert calls == ["ionic", "versa"]
        assert aggregator.components.watch["versa"].supports == {"family": "versa"}

    def test_registration_order_kept(
        self,
        aggregator: ComponentAggregator,
        device_artifact: ArtifactFactory,
    ) -> None:
        for family in ["versa", "ionic", "versa-2"]:
            aggregator.ingest(device_artifact(family))
        assert list(aggregator.components.watch) == ["versa", "ionic", "versa-2"]

    def test_logs_ingestion(
        self,
        aggregator: ComponentAggregator,
        device_artifact: ArtifactFactory,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        aggregator.ingest(device_artifact("ionic"))
        out = capsys.readouterr().out
        assert "bundle_ingested" in out
        assert "component_aggregator" in out


class TestComponentConflicts:
    """Tests for duplicate and mixed component errors."""

    @pytest.mark.requirement("duplicate-device-family")
    def test_duplicate_family(
        self,
        aggregator: ComponentAggregator,
        device_artifact: ArtifactFactory,
    ) -> None:
        aggregator.ingest(device_artifact("ionic", relative="a/device.zip"))
        with pytest.raises(DuplicateComponentError) as exc_info:
            aggregator.ingest(device_artifact("ionic", relative="b/device.zip"))
        assert str(exc_info.value) == (
            "Duplicate device/ionic component bundles: b/device.zip / a/device.zip"
        )

    def test_duplicate_message_with_windows_paths(
        self,
        aggregator: ComponentAggregator,
        device_artifact: ArtifactFactory,
        normalize_paths: Callable[[Any], Any],
    ) -> None:
        aggregator.ingest(device_artifact("ionic", relative="a\\device.zip"))
        with pytest.raises(DuplicateComponentError) as exc_info:
            aggregator.ingest(device_artifact("ionic", relative="b\\device.zip"))
        assert normalize_paths(exc_info.value) == (
            "Duplicate device/ionic component bundles: b/device.zip / a/device.zip"
        )

    def test_duplicate_family_reverse_order(
        self,
        aggregator: ComponentAggregator,
        device_artifact: ArtifactFactory,
    ) -> None:
        aggregator.ingest(device_artifact("ionic", relative="b/device.zip"))
        with pytest.raises(DuplicateComponentError) as exc_info:
            aggregator.ingest(device_artifact("ionic", relative="a/device.zip"))
        assert exc_info.value.file_path == "a/device.zip"
        assert exc_info.value.existing_path == "b/device.zip"

    def test_duplicate_companion(
        self,
        aggregator: ComponentAggregator,
        companion_artifact: ArtifactFactory,
    ) -> None:
        aggregator.ingest(companion_artifact("first/companion.zip"))
        with pytest.raises(DuplicateComponentError) as exc_info:
            aggregator.ingest(companion_artifact("second/companion.zip"))
        assert str(exc_info.value) == (
            "Duplicate companion component bundles: "
            "second/companion.zip / first/companion.zip"
        )

    @pytest.mark.requirement("mixed-device-components")
    @pytest.mark.parametrize("native_first", [True, False])
    def test_mixed_native_and_js(
        self,
        aggregator: ComponentAggregator,
        device_artifact: ArtifactFactory,
        native_first: bool,
    ) -> None:
        aggregator.ingest(device_artifact("ionic", native=native_first))
        with pytest.raises(MixedComponentTypeError) as exc_info:
            aggregator.ingest(device_artifact("versa", native=not native_first))
        assert exc_info.value.file_path == "device-versa.zip"

    def test_mixed_wins_over_duplicate(
        self,
        aggregator: ComponentAggregator,
        device_artifact: ArtifactFactory,
    ) -> None:
        aggregator.ingest(device_artifact("ionic"))
        with pytest.raises(MixedComponentTypeError):
            aggregator.ingest(device_artifact("ionic", native=True, relative="other.zip"))

    def test_companion_with_native_device_allowed(
        self,
        aggregator: ComponentAggregator,
        device_artifact: ArtifactFactory,
        companion_artifact: ArtifactFactory,
    ) -> None:
        aggregator.ingest(device_artifact("fenix", native=True))
        aggregator.ingest(companion_artifact())
        assert aggregator.components.companion is not None


class TestFailureAtomicity:
    """A failed ingest leaves the aggregator untouched."""

    @pytest.mark.requirement("ingest-atomic")
    def test_mixed_error_keeps_flags(
        self,
        aggregator: ComponentAggregator,
        device_artifact: ArtifactFactory,
    ) -> None:
        aggregator.ingest(device_artifact("ionic"))
        with pytest.raises(MixedComponentTypeError):
            aggregator.ingest(device_artifact("fenix", native=True))
        assert aggregator.components.has_native is False
        assert aggregator.components.has_js is True
        assert list(aggregator.components.watch) == ["ionic"]

    def test_invalid_tag_from_empty_stays_empty(
        self,
        aggregator: ComponentAggregator,
    ) -> None:
        with pytest.raises(ValidationError):
            aggregator.ingest(Artifact(relative="bad.zip", component_bundle={"type": "watch"}))
        assert aggregator.state is AggregatorState.EMPTY

    def test_invalid_tag_records_no_source_map(
        self,
        aggregator: ComponentAggregator,
    ) -> None:
        artifact = Artifact(
            relative="bad.zip",
            component_bundle={"type": "device"},
            component_map_key="device.ionic",
        )
        with pytest.raises(ValidationError):
            aggregator.ingest(artifact)
        assert aggregator.source_maps.to_dict() == {}

    def test_duplicate_records_no_source_map(
        self,
        aggregator: ComponentAggregator,
        companion_artifact: ArtifactFactory,
    ) -> None:
        aggregator.ingest(companion_artifact())
        duplicate = Artifact(
            relative="other/companion.zip",
            component_bundle={"type": "companion"},
            component_map_key="companion",
        )
        with pytest.raises(DuplicateComponentError):
            aggregator.ingest(duplicate)
        assert aggregator.source_maps.to_dict() == {}
        assert aggregator.components.companion is not None
        assert aggregator.components.companion.filename == "companion.zip"

    def test_malformed_map_key_registers_nothing(
        self,
        aggregator: ComponentAggregator,
    ) -> None:
        artifact = Artifact(
            relative="companion.zip",
            component_bundle={"type": "companion"},
            component_map_key="companion.",
        )
        with pytest.raises(SourceMapKeyError) as exc_info:
            aggregator.ingest(artifact)
        assert str(exc_info.value) == "Invalid source map key 'companion.' (in companion.zip)"
        assert exc_info.value.key == "companion."
        assert aggregator.components.companion is None
        assert aggregator.state is AggregatorState.EMPTY

    def test_failed_finalize_keeps_state(
        self,
        sample_project_yaml: dict[str, Any],
        companion_artifact: ArtifactFactory,
    ) -> None:
        config = ProjectConfig.model_validate(
            {**sample_project_yaml, "toolchain_version": "1000.0.0"}
        )
        aggregator = ComponentAggregator(config, BUILD_ID)
        aggregator.ingest(companion_artifact())

        with pytest.raises(VersionResolutionError):
            aggregator.finalize()
        assert aggregator.state is AggregatorState.ACCUMULATING


class TestSourceMaps:
    """Tests for source map recording."""

    def test_source_map_recorded(self, aggregator: ComponentAggregator) -> None:
        aggregator.ingest(
            Artifact(relative="sourcemaps/device/ionic.js.map", component_map_key="device.ionic")
        )
        assert aggregator.source_maps.to_dict() == {
            "device": {"ionic": "sourcemaps/device/ionic.js.map"}
        }

    @pytest.mark.requirement("empty-map-key-ignored")
    def test_empty_map_key_ignored(self, aggregator: ComponentAggregator) -> None:
        aggregator.ingest(Artifact(relative="x.map", component_map_key=""))
        assert aggregator.source_maps.to_dict() == {}
        assert aggregator.state is AggregatorState.ACCUMULATING

        manifest = _manifest(aggregator.finalize())
        assert manifest["sourceMaps"] == {}

    def test_source_map_path_normalized(self, aggregator: ComponentAggregator) -> None:
        aggregator.ingest(
            Artifact(relative="sourcemaps\\companion.js.map", component_map_key="companion")
        )
        assert aggregator.source_maps.get("companion") == "sourcemaps/companion.js.map"

    def test_component_filename_not_normalized(self, aggregator: ComponentAggregator) -> None:
        aggregator.ingest(
            Artifact(relative="bundles\\companion.zip", component_bundle={"type": "companion"})
        )
        assert aggregator.components.companion is not None
        assert aggregator.components.companion.filename == "bundles\\companion.zip"


class TestFinalize:
    """Tests for finalize()."""

    @pytest.mark.requirement("order-independent-manifest")
    def test_order_independent(
        self,
        project_config: ProjectConfig,
        device_artifact: ArtifactFactory,
        companion_artifact: ArtifactFactory,
    ) -> None:
        artifacts = [
            device_artifact("ionic"),
            companion_artifact(),
            Artifact(relative="sourcemaps/companion.js.map", component_map_key="companion"),
        ]
        forward = ComponentAggregator(project_config, BUILD_ID)
        backward = ComponentAggregator(project_config, BUILD_ID)
        for artifact in artifacts:
            forward.ingest(artifact)
        for artifact in reversed(artifacts):
            backward.ingest(artifact)

        assert _manifest(forward.finalize()) == _manifest(backward.finalize())

    def test_native_app_gets_tiles(
        self,
        sample_project_yaml: dict[str, Any],
        device_artifact: ArtifactFactory,
    ) -> None:
        config = ProjectConfig.model_validate(
            {
                **sample_project_yaml,
                "tiles": [{"name": "Clock", "id": "t1", "build_targets": ["fenix", "versa"]}],
            }
        )
        aggregator = ComponentAggregator(config, BUILD_ID)
        aggregator.ingest(device_artifact("fenix", native=True))

        manifest = _manifest(aggregator.finalize())
        assert manifest["components"]["tiles"] == [
            {"id": "t1", "name": "Clock", "platforms": ["fenix"]}
        ]
        assert aggregator.components.tiles is not None
        assert "sdkVersion" not in manifest

    def test_tiles_key_omitted_when_all_dropped(
        self,
        sample_project_yaml: dict[str, Any],
        device_artifact: ArtifactFactory,
    ) -> None:
        config = ProjectConfig.model_validate(
            {
                **sample_project_yaml,
                "tiles": [{"name": "Clock", "id": "t1", "build_targets": ["versa"]}],
            }
        )
        aggregator = ComponentAggregator(config, BUILD_ID)
        aggregator.ingest(device_artifact("fenix", native=True))

        manifest = _manifest(aggregator.finalize())
        assert "tiles" not in manifest["components"]

    def test_uses_injected_resolver(
        self,
        project_config: ProjectConfig,
        companion_artifact: ArtifactFactory,
        api_resolver: ApiVersionResolver,
    ) -> None:
        aggregator = ComponentAggregator(project_config, BUILD_ID, version_resolver=api_resolver)
        aggregator.ingest(companion_artifact())
        manifest = _manifest(aggregator.finalize())
        assert manifest["sdkVersion"] == {"companionApi": "3.1.0"}

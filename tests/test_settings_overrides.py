from __future__ import annotations

import pytest

from geozones.config.settings import get_settings

# The override helper is pure (no I/O) and guards what API clients may change.
from geozones.config.overrides import apply_settings_overrides


def test_apply_settings_overrides_returns_same_object_when_none():
    settings = get_settings()

    out = apply_settings_overrides(settings, None)

    # Identity is intentional: the function returns early without rebuilding the model.
    assert out is settings


def test_apply_settings_overrides_can_override_clustering_knobs():
    settings = get_settings()

    out = apply_settings_overrides(settings, {"clustering": {"radius_miles": 3.0, "neighbor_index": "grid"}})

    assert out.clustering.radius_miles == 3.0
    assert out.clustering.neighbor_index == "grid"
    # The cached settings must stay unchanged (no cross-request leakage).
    assert settings.clustering.radius_miles != 3.0


def test_apply_settings_overrides_rejects_output_paths_with_clear_path():
    settings = get_settings()

    with pytest.raises(ValueError, match=r"output\.dir"):
        apply_settings_overrides(settings, {"output": {"dir": "/etc"}})

    with pytest.raises(ValueError, match=r"summary\.map_link_template"):
        apply_settings_overrides(settings, {"summary": {"map_link_template": "x"}})


def test_apply_settings_overrides_rejects_wrong_value_shapes_for_restricted_subtrees():
    settings = get_settings()

    with pytest.raises(ValueError, match=r"settings_overrides key 'summary' must be a mapping"):
        apply_settings_overrides(settings, {"summary": 1})


@pytest.mark.parametrize("radius", [0, -2.5])
def test_apply_settings_overrides_revalidates_radius(radius):
    settings = get_settings()

    # pydantic.ValidationError is a ValueError subclass.
    with pytest.raises(ValueError, match="radius_miles"):
        apply_settings_overrides(settings, {"clustering": {"radius_miles": radius}})


def test_default_settings_match_packaged_yaml():
    settings = get_settings()
    assert settings.clustering.radius_miles == pytest.approx(1.5)
    assert settings.clustering.label_scheme == "letters"
    assert settings.summary.sample_address_limit == 3

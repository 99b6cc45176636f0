# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import json

import pytest

from arcglobe.countries import load_countries
from arcglobe.pipeline import GlobeDataPipeline
from arcglobe.points import parse_arcs
from arcglobe.renderers import available, create, get, slugs
from tests.helpers import SAMPLE_ARCS, write_countries


def _initialized(renderer, tmp_path, **config) -> GlobeDataPipeline:
    pipeline = GlobeDataPipeline(
        config or None,
        countries=load_countries(write_countries(tmp_path / "countries.geojson")),
        binding=renderer,
        seed=7,
    )
    pipeline.on_arcs_changed(parse_arcs(SAMPLE_ARCS))
    assert pipeline.initialize()
    return pipeline


def test_globe_renderers_registered() -> None:
    assert {renderer.slug for renderer in available()} >= {
        "json-snapshot",
        "three-globe",
    }
    assert slugs() == sorted(slugs())
    assert get(" Three-Globe ").slug == "three-globe"


def test_unknown_renderer_lists_choices() -> None:
    with pytest.raises(KeyError) as excinfo:
        create("cesium")
    assert "json-snapshot" in str(excinfo.value)


def test_json_snapshot_records_publications(tmp_path) -> None:
    renderer = create("json-snapshot", include_features=False)
    pipeline = _initialized(renderer, tmp_path)
    pipeline.tick()
    pipeline.tick()

    bundle = renderer.build(output_dir=tmp_path / "out")
    assert bundle.entry_point.name == "snapshot.json"
    snapshot = json.loads(bundle.entry_point.read_text(encoding="utf-8"))
    assert snapshot["ringPublications"] == 2
    assert snapshot["rings"]["tick"] == 1
    assert snapshot["hexPolygons"]["featureCount"] == 1
    assert "features" not in snapshot["hexPolygons"]
    assert [a["order"] for a in snapshot["arcs"]["arcs"]] == [0, 1]
    assert len(snapshot["points"]["points"]) == 3
    assert snapshot["points"]["points"][0]["color"] == {"r": 255, "g": 0, "b": 0}
    assert snapshot["material"]["color"] == "#1d072e"
    assert snapshot["config"]["arcTime"] == 2000


def test_json_snapshot_before_publication(tmp_path) -> None:
    renderer = create("json-snapshot")
    assert not renderer.initialized
    snapshot = renderer.snapshot()
    assert snapshot["arcs"] is None
    assert snapshot["ringPublications"] == 0


def test_three_globe_requires_initialized_layers(tmp_path) -> None:
    with pytest.raises(RuntimeError):
        create("three-globe").build(output_dir=tmp_path)


def test_three_globe_builds_bundle(tmp_path) -> None:
    renderer = create(
        "three-globe",
        width=640,
        height=360,
        globe_config={"autoRotateSpeed": 0.5},
    )
    pipeline = _initialized(renderer, tmp_path, autoRotateSpeed=0.5)
    renderer.configure(
        ring_frames=[pipeline.sample_rings(tick=i) for i in range(3)]
    )
    bundle = renderer.build(output_dir=tmp_path / "bundle")

    assert bundle.entry_point.exists()
    html = bundle.entry_point.read_text(encoding="utf-8")
    assert "window.ARCGLOBE_CONFIG" in html
    assert "<title>Arc Globe</title>" in html

    asset_paths = {path.name for path in bundle.assets}
    assert asset_paths == {"globe.js", "config.json", "data.json", "countries.json"}

    config_path = next(path for path in bundle.assets if path.name == "config.json")
    config = json.loads(config_path.read_text(encoding="utf-8"))
    assert config.get("width") == 640
    assert config.get("height") == 360
    assert config["countries"] == "assets/data/countries.json"
    assert config["ring_interval_ms"] == 2000
    assert config["globe"]["autoRotateSpeed"] == 0.5
    assert "ring_frames" not in config

    data_path = next(path for path in bundle.assets if path.name == "data.json")
    data = json.loads(data_path.read_text(encoding="utf-8"))
    assert "features" not in data["hexPolygons"]
    assert len(data["ringFrames"]) == 3
    assert all(frame == sorted(frame) for frame in data["ringFrames"])
    assert data["arcs"]["dashGap"] == 15

    script = (tmp_path / "bundle" / "assets" / "globe.js").read_text(encoding="utf-8")
    assert "three-globe" in script
    assert "ringsData" in script

    staged = tmp_path / "bundle" / "assets" / "data" / "countries.json"
    assert json.loads(staged.read_text(encoding="utf-8"))["features"][0][
        "properties"
    ] == {"name": "Square"}


def test_three_globe_falls_back_to_latest_rings(tmp_path) -> None:
    renderer = create("three-globe")
    pipeline = _initialized(renderer, tmp_path)
    selection = pipeline.tick()
    bundle = renderer.build(output_dir=tmp_path / "bundle")
    data = json.loads((bundle.output_dir / "assets" / "data.json").read_text())
    assert data["ringFrames"] == [sorted(selection.indices)]


def test_three_globe_escapes_title_and_inline_config(tmp_path) -> None:
    title = "Flights </script><script>alert(1)</script> & more"
    renderer = create("three-globe", title=title)
    _initialized(renderer, tmp_path)
    bundle = renderer.build(output_dir=tmp_path / "bundle")

    html = bundle.entry_point.read_text(encoding="utf-8")
    assert html.count("</script>") == 2
    assert "<\\/script><script>alert(1)<\\/script>" in html
    assert "<title>Flights &lt;/script&gt;" in html
    assert "&amp; more</title>" in html
    config = json.loads((bundle.output_dir / "assets" / "config.json").read_text())
    assert config["title"] == title

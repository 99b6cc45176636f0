# SPDX-License-Identifier: Apache-2.0
"""three-globe renderer that emits a standalone HTML bundle.

The bundle loads Three.js and three-globe from jsDelivr and replays the
layers the pipeline published: hex polygons, arcs, points, and a list of
pre-sampled ring frames cycled on the ring interval.
"""

from __future__ import annotations

import html
import json
import logging
from pathlib import Path
from textwrap import dedent
from typing import Any

from arcglobe.config import GlobeConfig, resolve_config
from arcglobe.rings import RING_INTERVAL_SECONDS, RingSelection

from .base import InteractiveBundle, InteractiveRenderer
from .registry import register

LOGGER = logging.getLogger(__name__)

CAMERA_Z = 300
CAMERA_ASPECT = 1.2


def _ring_frame(selection: RingSelection | dict[str, Any]) -> list[int]:
    if isinstance(selection, RingSelection):
        return sorted(selection.indices)
    return sorted(int(i) for i in selection.get("indices", []))


@register
class ThreeGlobeRenderer(InteractiveRenderer):
    slug = "three-globe"
    description = "three-globe renderer that emits a standalone bundle."

    def build(self, *, output_dir: Path) -> InteractiveBundle:
        if not self.initialized:
            raise RuntimeError(
                "No globe layers published; call GlobeDataPipeline.initialize() first"
            )
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        assets_dir = output_dir / "assets"
        assets_dir.mkdir(parents=True, exist_ok=True)

        index_html = output_dir / "index.html"
        script_path = assets_dir / "globe.js"
        config_path = assets_dir / "config.json"
        data_path = assets_dir / "data.json"

        asset_overrides, asset_files = self._stage_assets(assets_dir)

        config = self._sanitized_config(overrides=asset_overrides)
        config_path.write_text(json.dumps(config, indent=2) + "\n", encoding="utf-8")
        data_path.write_text(
            json.dumps(self._layer_data(), indent=2) + "\n", encoding="utf-8"
        )

        index_html.write_text(self._render_index_html(config), encoding="utf-8")
        script_path.write_text(self._render_script(), encoding="utf-8")

        LOGGER.debug("Wrote three-globe bundle to %s", output_dir)
        return InteractiveBundle(
            output_dir=output_dir,
            entry_point=index_html,
            assets=(script_path, config_path, data_path, *asset_files),
        )

    def _stage_assets(
        self, assets_dir: Path
    ) -> tuple[dict[str, object], tuple[Path, ...]]:
        """Write the country polygons next to the bundle."""

        data_dir = assets_dir / "data"
        data_dir.mkdir(parents=True, exist_ok=True)
        countries_path = data_dir / "countries.json"
        features = list(self.hex_polygons.features)
        countries_path.write_text(
            json.dumps({"type": "FeatureCollection", "features": features}),
            encoding="utf-8",
        )
        overrides = {"countries": "assets/data/countries.json"}
        return overrides, (countries_path,)

    def _globe_config(self) -> GlobeConfig:
        return resolve_config(self._options.get("globe_config"))

    def _ring_frames(self) -> list[list[int]]:
        frames = self._options.get("ring_frames")
        if frames:
            return [_ring_frame(frame) for frame in frames]
        if self.rings is not None:
            return [_ring_frame(self.rings)]
        return []

    def _layer_data(self) -> dict[str, Any]:
        hexes = self.hex_polygons.to_dict(include_features=False)
        hexes.pop("featureCount", None)
        return {
            "hexPolygons": hexes,
            "arcs": self.arcs.to_dict(),
            "points": self.points.to_dict(),
            "material": self.material.to_dict(),
            "ringFrames": self._ring_frames(),
        }

    def _sanitized_config(
        self, *, overrides: dict[str, object] | None = None
    ) -> dict[str, object]:
        """Return config suitable for embedding (JSON-safe values only)."""

        internal = {"globe_config", "ring_frames"}
        filtered = {
            key: value
            for key, value in self._options.items()
            if key not in internal and value is not None
        }
        filtered.setdefault("width", None)
        filtered.setdefault("height", None)
        filtered.setdefault("title", "Arc Globe")
        filtered.setdefault("ring_interval_ms", int(RING_INTERVAL_SECONDS * 1000))
        filtered.setdefault("camera_z", CAMERA_Z)
        filtered["globe"] = self._globe_config().to_camel_dict()
        if overrides:
            filtered.update(overrides)
        return filtered

    def _render_index_html(self, config: dict[str, object]) -> str:
        """Return the HTML entry point for the bundle."""

        # "</" inside the inline script would end the script element early
        config_json = json.dumps(config, indent=2).replace("</", "<\\/")
        title = html.escape(str(config["title"]))
        return (
            dedent(
                f"""
            <!DOCTYPE html>
            <html lang=\"en\">
              <head>
                <meta charset=\"utf-8\" />
                <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
                <title>{title}</title>
                <style>
                  html, body {{ margin: 0; padding: 0; width: 100%; height: 100%; background: #000000; overflow: hidden; }}
                  #arcglobe {{ width: 100vw; height: 100vh; display: block; }}
                </style>
              </head>
              <body>
                <canvas id=\"arcglobe\"></canvas>
                <script>
                  window.ARCGLOBE_CONFIG = {config_json};
                </script>
                <script type=\"module\" src=\"assets/globe.js\"></script>
              </body>
            </html>
            """
            ).strip()
            + "\n"
        )

    def _render_script(self) -> str:
        """Return the JavaScript module that boots the globe."""

        return (
            dedent(
                f"""
import * as THREE from "https://cdn.jsdelivr.net/npm/three@0.161.0/build/three.module.js";
import {{ OrbitControls }} from "https://cdn.jsdelivr.net/npm/three@0.161.0/examples/jsm/controls/OrbitControls.js";
import ThreeGlobe from "https://cdn.jsdelivr.net/npm/three-globe@2.31.0/+esm";

(async function bootstrap() {{
  const config = window.ARCGLOBE_CONFIG || {{}};
  const globeCfg = config.globe || {{}};
  const canvas = document.getElementById("arcglobe");
  if (!canvas) {{
    console.warn("arcglobe canvas element not found");
    return;
  }}

  const [data, countries] = await Promise.all([
    fetch("assets/data.json").then((r) => r.json()),
    fetch(config.countries).then((r) => r.json()),
  ]);

  const width = config.width || window.innerWidth;
  const height = config.height || window.innerHeight;
  const renderer = new THREE.WebGLRenderer({{ canvas, antialias: true, alpha: true }});
  renderer.setPixelRatio(window.devicePixelRatio || 1);
  renderer.setSize(width, height);
  renderer.setClearColor(0xffaaff, 0);

  const scene = new THREE.Scene();
  scene.fog = new THREE.Fog(0xffffff, 400, 2000);
  const camera = new THREE.PerspectiveCamera(50, {CAMERA_ASPECT}, 180, 1800);
  camera.position.z = config.camera_z || {CAMERA_Z};

  scene.add(new THREE.AmbientLight(globeCfg.ambientLight || "#ffffff", 0.6));
  const leftLight = new THREE.DirectionalLight(globeCfg.directionalLeftLight || "#ffffff");
  leftLight.position.set(-400, 100, 400);
  scene.add(leftLight);
  const topLight = new THREE.DirectionalLight(globeCfg.directionalTopLight || "#ffffff");
  topLight.position.set(-200, 500, 200);
  scene.add(topLight);
  const pointLight = new THREE.PointLight(globeCfg.pointLight || "#ffffff", 0.8);
  pointLight.position.set(-200, 500, 200);
  scene.add(pointLight);

  const fade = (rgb) => (t) => `rgba(${{rgb.r}},${{rgb.g}},${{rgb.b}},${{1 - Math.min(Math.max(t, 0), 1)}})`;
  const points = data.points.points.map((p) => ({{ ...p, color: fade(p.color) }}));
  const hex = data.hexPolygons;
  const arcs = data.arcs;

  const globe = new ThreeGlobe()
    .hexPolygonsData(countries.features)
    .hexPolygonResolution(hex.resolution)
    .hexPolygonMargin(hex.margin)
    .showAtmosphere(hex.showAtmosphere)
    .atmosphereColor(hex.atmosphereColor)
    .atmosphereAltitude(hex.atmosphereAltitude)
    .hexPolygonColor(() => hex.color);

  globe
    .arcsData(arcs.arcs)
    .arcStartLat((d) => d.startLat)
    .arcStartLng((d) => d.startLng)
    .arcEndLat((d) => d.endLat)
    .arcEndLng((d) => d.endLng)
    .arcColor((d) => d.color)
    .arcAltitude((d) => d.arcAlt)
    .arcStroke((d) => d.stroke)
    .arcDashLength(arcs.dashLength)
    .arcDashInitialGap((d) => d.dashInitialGap)
    .arcDashGap(arcs.dashGap)
    .arcDashAnimateTime(() => arcs.dashAnimateTime);

  globe
    .pointsData(points)
    .pointColor((d) => d.color(0))
    .pointsMerge(data.points.merge)
    .pointAltitude(data.points.altitude)
    .pointRadius(data.points.radius);

  globe
    .ringsData([])
    .ringColor((d) => d.color)
    .ringMaxRadius(data.points.ringMaxRadius)
    .ringPropagationSpeed(data.points.ringPropagationSpeed)
    .ringRepeatPeriod(data.points.ringRepeatPeriod);

  const material = globe.globeMaterial();
  material.color = new THREE.Color(data.material.color);
  material.emissive = new THREE.Color(data.material.emissive);
  material.emissiveIntensity = data.material.emissiveIntensity;
  material.shininess = data.material.shininess;

  scene.add(globe);

  const frames = Array.isArray(data.ringFrames) ? data.ringFrames : [];
  let frameIndex = 0;
  function showRings() {{
    if (!frames.length) return;
    const wanted = new Set(frames[frameIndex % frames.length]);
    globe.ringsData(points.filter((_, i) => wanted.has(i)));
    frameIndex += 1;
  }}
  showRings();
  if (frames.length) {{
    setInterval(showRings, config.ring_interval_ms);
  }}

  const controls = new OrbitControls(camera, renderer.domElement);
  controls.enablePan = false;
  controls.enableZoom = false;
  controls.minDistance = camera.position.z;
  controls.maxDistance = camera.position.z;
  controls.autoRotate = globeCfg.autoRotate !== false;
  controls.autoRotateSpeed = globeCfg.autoRotateSpeed || 1;
  controls.minPolarAngle = Math.PI / 3.5;
  controls.maxPolarAngle = Math.PI - Math.PI / 3;

  function animate() {{
    controls.update();
    renderer.render(scene, camera);
    requestAnimationFrame(animate);
  }}
  animate();
}})().catch((error) => {{
  console.error("arcglobe bootstrap failed", error);
}});
            """
            ).strip()
            + "\n"
        )

"""Tests for the preview display pipeline and file export.

Covers tone mapping of additive ray buffers, gamma encoding, PNG and SVG
output and image comparison. Matplotlib windows are never opened; only the
array processing behind show_preview is exercised.
"""

import numpy as np
import pytest
from PIL import Image as PILImage


def _overlap_buffer(layers: float, size: int = 4) -> np.ndarray:
    """Linear buffer where ``layers`` white rays overlap on every pixel."""
    return np.full((size, size, 3), layers, dtype=np.float32)


class TestToneMapping:
    """Reinhard and exposure operators on accumulated ray light."""

    @pytest.mark.parametrize("layers", [0.0, 0.5, 1.0, 4.0, 99.0])
    def test_reinhard_matches_closed_form(self, layers):
        from raysketch.preview.display import tone_map_reinhard

        result = tone_map_reinhard(_overlap_buffer(layers))
        assert np.allclose(result, layers / (1.0 + layers), atol=1e-6)

    def test_reinhard_stays_below_one(self):
        from raysketch.preview.display import tone_map_reinhard

        result = tone_map_reinhard(_overlap_buffer(5000.0))
        assert np.all(result < 1.0)

    def test_negative_light_is_clamped(self):
        from raysketch.preview.display import tone_map_exposure, tone_map_reinhard

        buffer = _overlap_buffer(-2.0)
        assert np.all(tone_map_reinhard(buffer) == 0.0)
        assert np.all(tone_map_exposure(buffer) == 0.0)

    def test_exposure_closed_form(self):
        from raysketch.preview.display import tone_map_exposure

        result = tone_map_exposure(_overlap_buffer(3.0), exposure=0.5)
        assert np.allclose(result, 1.0 - np.exp(-1.5), atol=1e-6)

    def test_exposure_is_monotonic(self):
        from raysketch.preview.display import tone_map_exposure

        buffer = _overlap_buffer(0.25)
        darker = tone_map_exposure(buffer, exposure=0.25)
        brighter = tone_map_exposure(buffer, exposure=4.0)
        assert np.all(brighter > darker)


class TestGamma:
    """Gamma encoding of display values."""

    def test_identity_gamma_returns_input(self):
        from raysketch.preview.display import apply_gamma

        buffer = np.linspace(0, 1, 12, dtype=np.float32).reshape(2, 2, 3)
        assert apply_gamma(buffer, gamma=1.0) is buffer

    def test_srgb_gamma_lifts_midtones_and_keeps_endpoints(self):
        from raysketch.preview.display import apply_gamma

        buffer = np.array([[[0.0, 0.25, 1.0]]], dtype=np.float32)
        result = apply_gamma(buffer, gamma=2.2)

        assert result[0, 0, 0] == pytest.approx(0.0)
        assert result[0, 0, 1] == pytest.approx(0.25 ** (1 / 2.2), rel=1e-5)
        assert result[0, 0, 2] == pytest.approx(1.0)

    @pytest.mark.parametrize("gamma", [0.0, -2.2])
    def test_non_positive_gamma(self, gamma):
        from raysketch.preview.display import apply_gamma

        with pytest.raises(ValueError, match="Gamma must be positive"):
            apply_gamma(_overlap_buffer(0.5), gamma=gamma)


class TestDisplayPipeline:
    """process_image_for_display and image sources."""

    def test_every_method_yields_displayable_values(self):
        from raysketch.preview.display import TONE_MAP_METHODS, process_image_for_display

        rng = np.random.default_rng(7)
        buffer = (rng.random((8, 8, 3)) * 20).astype(np.float32)

        for method in TONE_MAP_METHODS:
            result = process_image_for_display(buffer, tone_map=method)
            assert result.dtype == np.float32
            assert np.all((result >= 0.0) & (result <= 1.0))
            assert np.all(np.isfinite(result))

    def test_unmapped_overlaps_saturate(self):
        from raysketch.preview.display import process_image_for_display

        result = process_image_for_display(_overlap_buffer(3.0), tone_map="none")
        assert np.allclose(result, 1.0)

    def test_reinhard_without_gamma(self):
        from raysketch.preview.display import process_image_for_display

        result = process_image_for_display(_overlap_buffer(3.0), tone_map="reinhard", gamma=1.0)
        assert np.allclose(result, 0.75)

    def test_input_buffer_is_not_modified(self):
        from raysketch.preview.display import process_image_for_display

        buffer = _overlap_buffer(2.0)
        process_image_for_display(buffer, tone_map="exposure")
        assert np.all(buffer == 2.0)

    def test_unknown_method(self):
        from raysketch.preview.display import process_image_for_display

        with pytest.raises(ValueError, match="Unknown tone mapping method: filmic"):
            process_image_for_display(_overlap_buffer(1.0), tone_map="filmic")

    def test_canvas_is_read_as_height_width(self):
        from raysketch.preview.display import as_image
        from raysketch.preview.raster import RasterCanvas

        assert as_image(RasterCanvas(8, 4)).shape == (4, 8, 3)

    def test_array_without_channels_is_rejected(self):
        from raysketch.preview.display import as_image

        with pytest.raises(ValueError, match="Expected an"):
            as_image(np.zeros((4, 4), dtype=np.float32))


class TestPngExport:
    """8-bit conversion and PNG files written through Pillow."""

    def _traced_canvas(self):
        from raysketch.preview.raster import RasterCanvas
        from raysketch.scene.presets import create_demo_scene

        scene = create_demo_scene(64, 48, ray_step=45)
        scene.run()
        canvas = RasterCanvas(64, 48, blend_mode="additive")
        scene.draw(canvas)
        return canvas

    @pytest.mark.parametrize("tone_map", ["none", "reinhard", "exposure"])
    def test_save_canvas(self, tmp_path, tone_map):
        from raysketch.preview.export import save_png

        path = save_png(self._traced_canvas(), tmp_path / f"{tone_map}.png", tone_map=tone_map)

        with PILImage.open(path) as img:
            assert img.size == (64, 48)
            assert img.mode == "RGB"

    def test_save_array_accepts_string_path(self, tmp_path):
        from raysketch.preview.export import save_png_from_array

        gradient = np.zeros((10, 30, 3), dtype=np.float32)
        gradient[:, :, 2] = np.linspace(0, 1, 30)
        path = save_png_from_array(gradient, str(tmp_path / "gradient.png"), gamma=1.0)

        with PILImage.open(path) as img:
            pixels = np.asarray(img)
        assert pixels[0, 0, 2] == 0
        assert pixels[0, -1, 2] == 255

    def test_uint8_levels(self):
        from raysketch.preview.export import image_to_uint8

        buffer = np.array([[[0.0, 0.5, 1.0]]], dtype=np.float32)
        result = image_to_uint8(buffer, gamma=1.0)

        assert result.dtype == np.uint8
        assert result.tolist() == [[[0, 128, 255]]]


class TestSvgExport:
    """Writing SVG contexts to disk."""

    def test_save_svg(self, tmp_path):
        from raysketch.core.vector import Vector
        from raysketch.geometry.circle import Circle
        from raysketch.preview.export import save_svg
        from raysketch.preview.svg import SVGContext

        context = SVGContext(100, 100)
        context.circle(Circle(Vector(50, 50), 20))
        path = save_svg(context, tmp_path / "sketch.svg")

        assert "<circle" in path.read_text()


class TestRmse:
    """compute_rmse between two sketches."""

    def test_zero_for_identical_images(self):
        from raysketch.preview.export import compute_rmse

        buffer = _overlap_buffer(0.3, size=6)
        assert compute_rmse(buffer, buffer.copy()) == 0.0

    def test_half_intensity_difference(self):
        from raysketch.preview.export import compute_rmse

        assert compute_rmse(_overlap_buffer(0.0), _overlap_buffer(0.5)) == pytest.approx(0.5)

    def test_mismatched_shapes(self):
        from raysketch.preview.export import compute_rmse

        with pytest.raises(ValueError, match="shapes must match"):
            compute_rmse(_overlap_buffer(0.0, size=4), _overlap_buffer(0.0, size=5))


class TestPreviewExports:
    """Names re-exported from raysketch.preview."""

    def test_package_exports(self):
        import raysketch.preview as preview

        for name in (
            "show_preview",
            "show_comparison",
            "process_image_for_display",
            "tone_map_reinhard",
            "tone_map_exposure",
            "apply_gamma",
            "draw_shape",
        ):
            assert callable(getattr(preview, name))
        assert isinstance(preview.DEFAULT_STYLE, preview.DrawingStyle)

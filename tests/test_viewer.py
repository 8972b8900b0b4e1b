"""Tests for semantic zoom, color scales and tile summaries."""

import math

import pytest

from facetzoom_core.facets.aggregations import NumericStats
from facetzoom_core.model.record import Record
from facetzoom_core.viewer.color import GradientStop, LinearColorScale, hex_to_rgb
from facetzoom_core.viewer.presenter import TilePresenter, color_domain_from_stats
from facetzoom_core.viewer.zoom import Grain, SemanticZoomController, ZoomConfig


class TestSemanticZoom:
    @pytest.mark.parametrize(
        "width,grain",
        [(32, Grain.G0), (64, Grain.G0), (100, Grain.G1), (160, Grain.G1), (300, Grain.G2)],
    )
    def test_grain_for_width(self, width, grain):
        assert SemanticZoomController().grain_for_width(width) is grain

    def test_transition_plan(self):
        plan = SemanticZoomController().transition_plan(40, 200)
        assert plan.from_grain is Grain.G0
        assert plan.to_grain is Grain.G2
        assert plan.to_dict() == {"from": "G0", "to": "G2", "duration": 180}

    def test_no_transition_within_grain(self):
        assert SemanticZoomController().transition_plan(80, 90) is None

    def test_from_config(self):
        zoom = SemanticZoomController.from_config(ZoomConfig(g0_max=10, g1_max=20, crossfade_ms=50))
        assert zoom.grain_for_width(15) is Grain.G1
        assert zoom.transition_plan(25, 5).duration == 50

    @pytest.mark.parametrize("g0_max,g1_max", [(0, 10), (-5, 10), (64, 64), (100, 50)])
    def test_invalid_thresholds(self, g0_max, g1_max):
        with pytest.raises(ValueError):
            SemanticZoomController(g0_max, g1_max)

    def test_grains_are_ordered(self):
        assert Grain.G0 < Grain.G1 < Grain.G2
        assert max([Grain.G1, Grain.G2, Grain.G0]) is Grain.G2


class TestColorScale:
    def test_default_gradient(self):
        scale = LinearColorScale((0, 100))
        assert scale.sample(0) == "rgb(29, 78, 216)"
        assert scale.sample(50) == "rgb(168, 85, 247)"
        assert scale.sample(100) == "rgb(245, 158, 11)"

    def test_values_clamp_to_domain(self):
        scale = LinearColorScale((0, 100))
        assert scale.sample(-50) == scale.sample(0)
        assert scale.sample(150) == scale.sample(100)

    def test_reverse(self):
        scale = LinearColorScale((0, 100), reverse=True)
        assert scale.sample(0) == "rgb(245, 158, 11)"
        assert scale.sample(100) == "rgb(29, 78, 216)"

    def test_reversed_domain_is_normalized(self):
        scale = LinearColorScale((100, 0))
        assert scale.domain == (0, 100)
        assert scale.sample(0) == "rgb(29, 78, 216)"

    def test_channels_round_half_up(self):
        stops = [GradientStop(0, "#000000"), GradientStop(1, "#fff")]
        assert LinearColorScale((0, 1), stops).sample(0.5) == "rgb(128, 128, 128)"

    def test_nan_sample(self):
        with pytest.raises(ValueError):
            LinearColorScale((0, 1)).sample(math.nan)

    def test_legend(self):
        legend = LinearColorScale((10, 20)).legend()
        assert [t.value for t in legend] == [10, 15, 20]
        assert [t.label for t in legend] == ["10", "15", "20"]

    def test_legend_has_at_least_two_ticks(self):
        assert len(LinearColorScale((0, 1)).legend(min_ticks=1)) == 2

    def test_degenerate_domain(self):
        with pytest.raises(ValueError):
            LinearColorScale((5, 5))

    def test_stops_must_span_unit_interval(self):
        with pytest.raises(ValueError):
            LinearColorScale((0, 1), [GradientStop(0.2, "#000000"), GradientStop(1, "#ffffff")])
        with pytest.raises(ValueError):
            LinearColorScale((0, 1), [])

    def test_bad_colors(self):
        with pytest.raises(ValueError):
            hex_to_rgb("rgb(0, 0, 0)")
        with pytest.raises(ValueError):
            LinearColorScale((0, 1), [GradientStop(0, "#000000"), GradientStop(1, "#12345")])

    def test_short_hex(self):
        assert hex_to_rgb("#fA0") == (255, 170, 0)


class TestTilePresenter:
    @pytest.fixture
    def presenter(self):
        return TilePresenter(
            zoom=SemanticZoomController(),
            color_scale=LinearColorScale((0, 100)),
            color_field="value",
        )

    def test_detailed_tile(self, presenter, sample_records):
        tile = presenter.summarise_tile(300, sample_records[0])
        assert tile.grain is Grain.G2
        assert tile.title == "Alpha"
        assert tile.metrics == {"score": 0.73, "value": 42.1}
        assert tile.color == presenter.color_scale.sample(42.1)

    def test_coarse_tile(self, presenter, sample_records):
        tile = presenter.summarise_tile(32, sample_records[1])
        assert tile.to_dict() == {"id": "2", "grain": "G0", "color": "rgb(57, 79, 222)"}

    @pytest.mark.parametrize("metrics", [None, {}, {"value": math.nan}, {"value": True}])
    def test_color_omitted_without_finite_metric(self, presenter, metrics):
        tile = presenter.summarise_tile(300, Record(id="x", title="X", metrics=metrics))
        assert tile.color is None
        assert "color" not in tile.to_dict()

    def test_update_color_scale(self, presenter, sample_records):
        presenter.update_color_scale(LinearColorScale((0, 10)))
        tile = presenter.summarise_tile(100, sample_records[1])
        assert tile.color == "rgb(245, 158, 11)"
        assert [t.label for t in presenter.legend_labels()] == ["0.00e+00", "5", "10"]


class TestColorDomain:
    def test_prefers_percentiles(self):
        stats = NumericStats(field="v", min=0, max=1000, count=10, p01=5, p99=90)
        assert color_domain_from_stats(stats) == (5, 90)
        assert color_domain_from_stats(stats, use_percentiles=False) == (0, 1000)

    def test_falls_back_to_extremes(self):
        stats = NumericStats(field="v", min=1, max=3, count=3)
        assert color_domain_from_stats(stats) == (1, 3)

    def test_empty_span(self):
        assert color_domain_from_stats(None) is None
        assert color_domain_from_stats(NumericStats(field="v", min=2, max=2, count=1)) is None

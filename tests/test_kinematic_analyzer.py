import pytest

from core.domain import Landmark, NoThrowDetected, ThrowingSide, Timeline
from core.services import GeometryEngine, KinematicAnalyzer

DT = 1.0 / 30.0


@pytest.fixture
def analyzer(settings):
    return KinematicAnalyzer(settings)


class TestReleaseDetection:

    def test_single_jump_is_release(self, analyzer, make_timeline):
        timeline = make_timeline([(0.0, 0.0), (300.0, 0.0)] + [(300.0, 0.0)] * 5)

        release = analyzer.detect_release(timeline)

        assert release.frame_index == 1
        assert release.timestamp == pytest.approx(DT)
        assert release.peak_speed_px_per_s == pytest.approx(9000.0)

    def test_wrist_speeds(self, analyzer, make_timeline):
        timeline = make_timeline([(0.0, 0.0), (3.0, 4.0), (3.0, 4.0)])
        assert analyzer.wrist_speeds(timeline) == pytest.approx([150.0, 0.0])

    def test_first_peak_wins_on_ties(self, analyzer, make_timeline):
        timeline = make_timeline([(0.0, 0.0), (100.0, 0.0), (200.0, 0.0), (200.0, 0.0)])
        assert analyzer.detect_release(timeline).frame_index == 1

    def test_peak_searched_over_whole_timeline(self, analyzer, make_timeline):
        path = [(0.0, 0.0), (20.0, 0.0), (20.0, 0.0), (20.0, 0.0), (80.0, 0.0), (80.0, 0.0)]
        assert analyzer.detect_release(make_timeline(path)).frame_index == 4

    def test_slow_motion_is_not_a_throw(self, analyzer, make_timeline):
        # 1 px per frame = 30 px/s everywhere
        timeline = make_timeline([(float(i), 0.0) for i in range(40)])

        with pytest.raises(NoThrowDetected) as exc_info:
            analyzer.detect_release(timeline)

        assert exc_info.value.peak_speed == pytest.approx(30.0)
        assert exc_info.value.to_dict() == {"error": "No throw detected. Try throwing faster/closer."}

    @pytest.mark.parametrize("frames", [0, 1])
    def test_too_short_timeline_is_not_a_throw(self, analyzer, make_timeline, frames):
        timeline = make_timeline([(0.0, 0.0)] * frames)
        with pytest.raises(NoThrowDetected):
            analyzer.detect_release(timeline)

    @pytest.mark.parametrize("frames", [0, 1])
    def test_too_short_timeline_with_zero_threshold(self, settings, make_timeline, frames):
        analyzer = KinematicAnalyzer(settings.with_overrides(no_throw_speed_threshold=0.0))
        with pytest.raises(NoThrowDetected):
            analyzer.detect_release(make_timeline([(0.0, 0.0)] * frames))

    def test_threshold_is_configurable(self, settings, make_timeline):
        timeline = make_timeline([(float(i), 0.0) for i in range(10)])
        lenient = KinematicAnalyzer(settings.with_overrides(no_throw_speed_threshold=10.0))
        assert lenient.detect_release(timeline).frame_index == 1

    def test_tracks_configured_wrist(self, settings, make_timeline):
        timeline = make_timeline([(85.0, 195.0), (85.0, 195.0), (185.0, 195.0)], landmark=Landmark.LEFT_WRIST)

        with pytest.raises(NoThrowDetected):
            KinematicAnalyzer(settings).detect_release(timeline)

        lefty = KinematicAnalyzer(settings.with_overrides(throwing_side=ThrowingSide.LEFT))
        assert lefty.detect_release(timeline).frame_index == 2

    def test_gaps_use_list_adjacency(self, analyzer, make_frame):
        # Frame at t=1/30 was dropped upstream; speed still uses the fixed interval
        timeline = Timeline.from_frames([
            make_frame(0.0, {Landmark.RIGHT_WRIST: (0.0, 0.0)}),
            make_frame(2 * DT, {Landmark.RIGHT_WRIST: (10.0, 0.0)}),
        ])
        assert analyzer.detect_release(timeline).peak_speed_px_per_s == pytest.approx(300.0)


class TestReleaseMetrics:

    def test_velocity_estimate(self, analyzer):
        assert analyzer.estimate_velocity_mph(9000.0) == pytest.approx(9000.0 / 250.0 * 2.237 * 1.5)

    def test_velocity_uses_calibration(self, settings):
        analyzer = KinematicAnalyzer(settings.with_overrides(pixels_per_meter=500.0, velocity_correction_factor=1.0))
        assert analyzer.estimate_velocity_mph(1000.0) == pytest.approx(2.0 * 2.237)

    def test_metrics_at_release_frame(self, analyzer, make_timeline):
        timeline = make_timeline([(210.0, 150.0)] * 3 + [(300.0, 150.0)] * 3)

        release, metrics = analyzer.analyze(timeline)

        assert release.frame_index == 3
        assert metrics.release_time_seconds == pytest.approx(0.1)
        assert metrics.separation_degrees == pytest.approx(0.0)
        assert metrics.elbow_degrees == pytest.approx(90.0)
        assert metrics.estimated_velocity_mph == pytest.approx(2700.0 / 250.0 * 2.237 * 1.5)

    def test_elbow_measured_on_release_frame(self, analyzer, make_timeline):
        timeline = make_timeline([(0.0, 0.0), (300.0, 0.0)] + [(300.0, 0.0)] * 5)

        release, metrics = analyzer.analyze(timeline)

        expected = GeometryEngine.elbow_angle(timeline[1], ThrowingSide.RIGHT)
        assert metrics.elbow_degrees == pytest.approx(expected)
        assert metrics.elbow_degrees < 70.0

    def test_release_time_uses_frame_index(self, settings, make_timeline):
        analyzer = KinematicAnalyzer(settings.with_overrides(frame_interval_seconds=0.02))
        timeline = make_timeline([(0.0, 0.0)] * 5 + [(50.0, 0.0)], interval=DT)

        release, metrics = analyzer.analyze(timeline)

        assert release.frame_index == 5
        assert metrics.release_time_seconds == pytest.approx(0.1)
        assert release.peak_speed_px_per_s == pytest.approx(2500.0)

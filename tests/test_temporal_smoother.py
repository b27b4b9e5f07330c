import math

import pytest

from core.domain import Landmark
from core.services import OneEuroFilter, TemporalSmoother
from core.services.temporal_smoother import smoothing_factor

DT = 1.0 / 30.0


def run(f, values, dt=DT):
    return [f.filter(v, i * dt) for i, v in enumerate(values)]


class TestOneEuroFilter:

    def test_first_sample_passes_through(self):
        f = OneEuroFilter()
        assert f.filter(42.5, 0.0) == 42.5

    def test_constant_signal_is_held(self):
        out = run(OneEuroFilter(), [7.0] * 60)
        for value in out:
            assert value == pytest.approx(7.0, abs=1e-12)

    def test_converges_after_step(self):
        out = run(OneEuroFilter(), [0.0] + [100.0] * 150)
        assert 0.0 < out[1] < 100.0
        assert out[-1] == pytest.approx(100.0, abs=1e-3)
        assert out[-1] == pytest.approx(out[-2], abs=1e-3)

    def test_output_lags_but_follows_ramp(self):
        values = [5.0 * i for i in range(30)]
        out = run(OneEuroFilter(), values)
        for raw, smoothed in zip(values[1:], out[1:]):
            assert smoothed < raw
        assert all(b > a for a, b in zip(out[1:], out[2:]))

    def test_duplicate_timestamp_returns_previous_and_keeps_state(self):
        reference = OneEuroFilter()
        expected = [reference.filter(0.0, 0.0), reference.filter(10.0, DT), reference.filter(10.0, 2 * DT)]

        f = OneEuroFilter()
        f.filter(0.0, 0.0)
        first = f.filter(10.0, DT)
        assert f.filter(1000.0, DT) == first
        assert f.filter(-50.0, 0.5 * DT) == first
        assert f.filter(10.0, 2 * DT) == expected[2]

    def test_higher_beta_reduces_lag(self):
        values = [20.0 * i for i in range(20)]
        legacy = run(OneEuroFilter(beta=0.0), values)
        adaptive = run(OneEuroFilter(beta=0.05), values)
        assert values[-1] - adaptive[-1] < values[-1] - legacy[-1]

    def test_matches_closed_form_second_sample(self):
        f = OneEuroFilter(min_cutoff=1.0, beta=0.05, d_cutoff=1.0)
        f.filter(0.0, 0.0)
        out = f.filter(30.0, DT)

        a_d = smoothing_factor(1.0, DT)
        dx_hat = a_d * (30.0 / DT)
        a = smoothing_factor(1.0 + 0.05 * abs(dx_hat), DT)
        assert out == pytest.approx(a * 30.0)

    def test_reset_forgets_history(self):
        f = OneEuroFilter()
        run(f, [0.0, 50.0, 80.0])
        f.reset()
        assert f.filter(3.0, 10.0) == 3.0

    def test_smoothing_factor(self):
        r = 2 * math.pi * 1.0 * DT
        assert smoothing_factor(1.0, DT) == pytest.approx(r / (r + 1))

    @pytest.mark.parametrize("kwargs", [
        {"min_cutoff": -0.1},
        {"beta": -1.0},
        {"d_cutoff": 0.0},
    ])
    def test_rejects_invalid_parameters(self, kwargs):
        with pytest.raises(ValueError):
            OneEuroFilter(**kwargs)


class TestTemporalSmoother:

    def test_bank_has_one_filter_per_coordinate(self):
        assert len(TemporalSmoother()) == 34

    def test_smooth_returns_new_timeline(self, throw_timeline):
        smoothed = TemporalSmoother().smooth(throw_timeline)

        assert smoothed is not throw_timeline
        assert len(smoothed) == len(throw_timeline)
        assert smoothed[0] == throw_timeline[0]
        assert [f.timestamp for f in smoothed] == [f.timestamp for f in throw_timeline]

        raw_wrist = throw_timeline[12].get_keypoint(Landmark.RIGHT_WRIST)
        smooth_wrist = smoothed[12].get_keypoint(Landmark.RIGHT_WRIST)
        assert smooth_wrist.x < raw_wrist.x
        assert smooth_wrist.confidence == raw_wrist.confidence

    def test_static_landmarks_are_unchanged(self, throw_timeline):
        smoothed = TemporalSmoother().smooth(throw_timeline)
        for frame in smoothed:
            hip = frame.get_keypoint(Landmark.LEFT_HIP)
            assert hip.x == pytest.approx(110.0)
            assert hip.y == pytest.approx(200.0)

    def test_banks_do_not_share_state(self, throw_timeline, still_timeline):
        first = TemporalSmoother()
        first.smooth(throw_timeline)

        expected = TemporalSmoother().smooth(still_timeline)
        assert TemporalSmoother().smooth(still_timeline) == expected
        assert first.frames_seen == len(throw_timeline)

    def test_filter_frame_is_causal(self, throw_timeline):
        whole = TemporalSmoother().smooth(throw_timeline)

        streaming = TemporalSmoother()
        for index, frame in enumerate(throw_timeline):
            assert streaming.filter_frame(frame) == whole[index]

    def test_uses_configured_parameters(self, throw_timeline, settings):
        legacy = TemporalSmoother(settings.with_overrides(beta=0.0)).smooth(throw_timeline)
        default = TemporalSmoother(settings).smooth(throw_timeline)

        legacy_x = legacy[14].get_keypoint(Landmark.RIGHT_WRIST).x
        default_x = default[14].get_keypoint(Landmark.RIGHT_WRIST).x
        assert legacy_x < default_x

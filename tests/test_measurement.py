import pytest

from measurement import (
    LABEL_MARGIN_X,
    LABEL_MARGIN_Y,
    DistanceMeasurement,
    MeasurementState,
    clamp_label,
)


@pytest.fixture
def measurement():
    m = DistanceMeasurement()
    m.start()
    return m


def test_tool_is_off_by_default(plate_view):
    m = DistanceMeasurement()
    assert not m.active
    assert m.state is MeasurementState.NONE
    assert not m.place_point(plate_view, (1800, 720))
    assert m.overlay(plate_view) is None


def test_started_tool_draws_nothing(plate_view, measurement):
    assert measurement.active
    assert measurement.overlay(plate_view) is None


def test_first_point(plate_view, measurement):
    assert measurement.place_point(plate_view, (1800, 720))
    assert measurement.state is MeasurementState.FIRST_POINT_SET
    assert measurement.from_ == measurement.to
    assert measurement.from_ == pytest.approx((0.0, 0.0))

    overlay = measurement.overlay(plate_view)
    assert overlay.distance == "0 km"
    assert len(overlay.markers) == 1
    assert overlay.markers[0].first
    assert overlay.markers[0].position == pytest.approx((1800.0, 720.0))
    assert overlay.paths == []
    assert overlay.labels == []


def test_second_point(plate_view, measurement):
    measurement.place_point(plate_view, (1800, 720))
    assert measurement.place_point(plate_view, (1900, 720))
    assert measurement.state is MeasurementState.LAST_POINT_SET
    assert measurement.to == pytest.approx((10.0, 0.0))
    assert measurement.distance() == pytest.approx(1111.95, abs=0.01)
    # both points are placed
    assert not measurement.place_point(plate_view, (2000, 720))

    overlay = measurement.overlay(plate_view)
    assert overlay.distance == "1112 km"
    assert [m.first for m in overlay.markers] == [True, False]
    assert overlay.markers[1].position == pytest.approx((1900.0, 720.0))
    assert overlay.paths == [overlay.arc.path]
    assert overlay.labels == [pytest.approx((1850.0, 690.0))]
    assert len(overlay.arc.points) == 101


def test_overlay_in_miles(plate_view, measurement):
    measurement.place_point(plate_view, (1800, 720))
    measurement.place_point(plate_view, (1900, 720))
    assert measurement.overlay(plate_view, use_miles=True).distance == "690.9 mi"


def test_move_point(plate_view, measurement):
    measurement.place_point(plate_view, (1800, 720))
    # the last point does not exist yet
    assert not measurement.move_point(plate_view, (1900, 720), first=False)
    assert measurement.move_point(plate_view, (1800, 620), first=True)
    assert measurement.from_ == pytest.approx((0.0, 10.0))

    measurement.place_point(plate_view, (1900, 720))
    assert measurement.move_point(plate_view, (2000, 720), first=False)
    assert measurement.to == pytest.approx((20.0, 0.0))
    assert measurement.from_ == pytest.approx((0.0, 10.0))


def test_move_point_when_off(plate_view):
    assert not DistanceMeasurement().move_point(plate_view, (0, 0), first=True)


def test_stop(plate_view, measurement):
    measurement.place_point(plate_view, (1800, 720))
    measurement.stop()
    assert not measurement.active
    assert measurement.overlay(plate_view) is None


def test_measurement_across_antimeridian(plate_view, measurement):
    measurement.place_point(plate_view, (3500, 720))
    measurement.place_point(plate_view, (100, 720))
    assert measurement.to == pytest.approx((-170.0, 0.0))

    overlay = measurement.overlay(plate_view)
    assert overlay.distance == "2224 km"
    assert len(overlay.markers) == 4
    assert [m.first for m in overlay.markers] == [True, False, True, False]
    assert overlay.markers[2].position == pytest.approx((-100.0, 720.0))
    assert len(overlay.paths) == 2
    assert overlay.labels == [
        pytest.approx((3600.0 - LABEL_MARGIN_X, 690.0)),
        pytest.approx((LABEL_MARGIN_X, 690.0)),
    ]


def test_overlay_needs_projection(unready_view, measurement):
    assert not measurement.place_point(unready_view, (10, 10))
    m = DistanceMeasurement((0.0, 0.0), (10.0, 0.0), MeasurementState.LAST_POINT_SET)
    assert m.overlay(unready_view) is None


@pytest.mark.parametrize("position,expected", [
    ((500.0, 300.0), (500.0, 300.0)),
    ((-20.0, 300.0), (LABEL_MARGIN_X, 300.0)),
    ((2000.0, -5.0), (1000.0 - LABEL_MARGIN_X, LABEL_MARGIN_Y)),
    ((500.0, 900.0), (500.0, 800.0 - LABEL_MARGIN_Y)),
])
def test_clamp_label(position, expected):
    assert clamp_label(position, 1000.0, 800.0) == expected

import xml.etree.ElementTree as ET

import pytest

from addgrid import (
    DEFAULT_STEP,
    STEP_TABLE,
    GridLines,
    LineDef,
    addgrid,
    build_lines_lists,
    calculate_step,
    calculate_view_step,
    major_parallels,
)
from proj import WebMercatorView
from rect import Rect

ALLOWED_STEPS = {step for _, step in STEP_TABLE} | {DEFAULT_STEP}


@pytest.mark.parametrize("pixels,expected", [
    (250000.0, 1),
    (180000.0, 1),
    (179999.0, 2),
    (36000.0, 5),
    (3000.0, 60),
    (500.0, 360),
    (100.0, 1800),
    (75.0, 3600),
    (50.0, 3600),
    (10.0, 18000),
    (9.99, 36000),
    (0.5, 36000),
])
def test_calculate_step_table(pixels, expected):
    assert calculate_step(pixels) == expected


@pytest.mark.parametrize("pixels", [None, 0, 0.0])
def test_calculate_step_without_projection(pixels):
    assert calculate_step(pixels) == DEFAULT_STEP


def test_calculate_step_is_monotonic():
    probes = [0.1 * 1.3 ** i for i in range(80)]
    steps = [calculate_step(p) for p in probes]
    assert all(a >= b for a, b in zip(steps, steps[1:]))
    assert set(steps) <= ALLOWED_STEPS
    assert steps[0] == 36000 and steps[-1] == 1


def test_calculate_view_step(plate_view, unready_view):
    assert calculate_view_step(plate_view) == 18000
    assert calculate_view_step(unready_view) == DEFAULT_STEP


def test_build_lines_lists_whole_world(plate_view):
    grid = build_lines_lists(plate_view, plate_view.extent_rect())
    assert grid.step == 18000
    # -180°..180° and -70°..70° every 5°
    assert len(grid.meridians) == 73
    assert len(grid.parallels) == 29
    assert grid.meridians[0] == LineDef("180°", 0.0)
    assert grid.meridians[-1] == LineDef("180°", 3600.0)
    assert LineDef("0°", 1800.0) in grid.meridians
    assert LineDef("0°", 720.0) in grid.parallels
    assert grid.parallels[0] == LineDef("70°", 1420.0)


def test_build_lines_lists_with_step(plate_view):
    grid = build_lines_lists(plate_view, plate_view.extent_rect(), step=36000)
    assert len(grid.meridians) == 37
    assert [m.label for m in grid.meridians[:3]] == ["180°", "170°", "160°"]


def test_build_lines_lists_fine_step(plate_view):
    rect = Rect(0, 120, 120, 0)
    grid = build_lines_lists(plate_view, rect, step=60)
    assert [m.label for m in grid.meridians] == ["0°", "0° 1'", "0° 2'"]
    assert [p.label for p in grid.parallels] == ["0°", "0° 1'", "0° 2'"]


def test_build_lines_lists_across_antimeridian(plate_view):
    rect = Rect(170 * 3600, 10 * 3600, -170 * 3600, -10 * 3600)
    grid = build_lines_lists(plate_view, rect, step=36000)
    labels = [m.label for m in grid.meridians]
    assert len(labels) == 39
    assert labels[0] == "170°"
    assert labels.count("180°") == 2
    assert grid.meridians[0].position == pytest.approx(-100.0)
    assert [p.label for p in grid.parallels] == ["10°", "0°", "10°"]


def test_build_lines_lists_wide_view_across_antimeridian():
    view = WebMercatorView(center=(180.0, 0.0), zoom=3, width=1280, height=720)
    grid = build_lines_lists(view, view.extent_rect())
    assert grid.step == DEFAULT_STEP
    on_screen = [m for m in grid.meridians if 0 <= m.position <= 1280]
    assert LineDef("180°", pytest.approx(640.0)) in on_screen
    assert len(on_screen) == 23


def test_build_lines_lists_view_centred_past_antimeridian():
    view = WebMercatorView(center=(200.0, 0.0), zoom=8, width=1280, height=720)
    grid = build_lines_lists(view, view.extent_rect())
    assert grid.step == 1800
    assert len(grid.meridians) == 15
    assert all(0 <= m.position <= 1280 for m in grid.meridians)
    # 200°E is 160°W
    assert LineDef("160°", pytest.approx(640.0)) in grid.meridians


def test_build_lines_lists_needs_projection(unready_view):
    assert build_lines_lists(unready_view, Rect(0, 10, 10, 0)) is None


def test_major_parallels(plate_view):
    names = [p.label for p in major_parallels(plate_view, plate_view.extent_rect())]
    assert names == ["Arctic Circle", "Tropic of Cancer", "Tropic of Capricorn", "Antarctic Circle"]

    lines = major_parallels(plate_view, Rect(0, 30 * 3600, 10, -10 * 3600))
    assert len(lines) == 1
    assert lines[0].label == "Tropic of Cancer"
    assert lines[0].position == pytest.approx(720 - 84374 / 360)


def test_major_parallels_needs_projection(unready_view):
    assert major_parallels(unready_view, Rect(0, 300000, 10, -300000)) == []


def test_addgrid_inserts_lines_before_closing_tag():
    grid = GridLines(
        meridians=[LineDef("0°", 10.0), LineDef("10°", 20.0)],
        parallels=[LineDef("0°", 5.0)],
    )
    orig = '<svg xmlns="http://www.w3.org/2000/svg" width="30" height="40">\n<g/>\n</svg>\n'
    result = addgrid(orig, grid, 30, 40, [LineDef("Tropic of Cancer", 7.0)])

    root = ET.fromstring(result)
    lines = root.findall("{http://www.w3.org/2000/svg}line")
    assert len(lines) == 4
    assert lines[0].get("x1") == "10.000000"
    assert lines[0].get("y2") == "40"
    assert lines[2].get("x2") == "30"
    assert lines[3].get("stroke-dasharray") == "5"
    assert result.endswith("</svg>\n")

import math

import pytest

from charting.drawing.models import (
    ActiveDrawing, DEFAULT_COLOR, DEFAULT_FILL_COLOR, DomainPoint, LineDrawing, ShapeDrawing, TextDrawing,
)
from charting.drawing.renderer import DrawingRenderer, RAY_EXTEND_LENGTH


@pytest.fixture
def renderer(surface, mapper):
    return DrawingRenderer(surface, mapper)


def line(drawing_type, a, b, drawing_id=1):
    return LineDrawing(id=drawing_id, type=drawing_type, points=(a, b))


def shape(drawing_type, a, b, drawing_id=1):
    return ShapeDrawing(id=drawing_id, type=drawing_type, points=(a, b))


def test_trendline_with_handles(renderer, surface, p1, p2):
    drawn = renderer.render([line('trendline', p1, p2)], [])

    assert drawn == 1
    assert surface.calls[0] == ('line', 100.0, 400.0, 200.0, 300.0, DEFAULT_COLOR, 2)
    assert surface.kinds() == ['line', 'circle', 'circle']
    assert surface.flushes == 1


def test_horizontal_line_spans_width_with_price_label(renderer, surface, p1, p2):
    renderer.render([line('horizontal-line', p1, p2)], [])

    assert surface.calls[0] == ('line', 0, 400.0, 800, 400.0, DEFAULT_COLOR, 2)
    assert surface.calls[1] == ('text', 790, 400.0, '50.00', '#000000', 12, DEFAULT_COLOR, 'right')


def test_vertical_line_spans_height(renderer, surface, p1, p2):
    renderer.render([line('vertical-line', p1, p2)], [])
    assert surface.calls == [('line', 100.0, 0, 100.0, 600, DEFAULT_COLOR, 2)]


def test_ray_is_extended(renderer, surface, p1, p2):
    renderer.render([line('ray', p1, p2)], [])

    _, x1, y1, x2, y2, _, _ = surface.calls[0]
    step = RAY_EXTEND_LENGTH / math.sqrt(2)
    assert (x1, y1) == (100.0, 400.0)
    assert x2 == pytest.approx(100.0 + step)
    assert y2 == pytest.approx(400.0 - step)
    assert surface.kinds() == ['line', 'circle']


def test_zero_length_ray_is_skipped(renderer, surface, p1):
    assert renderer.render([line('ray', p1, p1)], []) == 0
    assert surface.calls == []


def test_rectangle_with_four_handles(renderer, surface, p1, p2):
    renderer.render([], [shape('rectangle', p1, p2)])

    assert surface.calls[0] == ('rectangle', 100.0, 400.0, 100.0, -100.0, DEFAULT_COLOR, 2, DEFAULT_FILL_COLOR)
    handles = [(c[1], c[2]) for c in surface.calls[1:]]
    assert handles == [(100.0, 400.0), (200.0, 300.0), (100.0, 300.0), (200.0, 400.0)]


def test_circle_radius_is_distance_between_points(renderer, surface, p1, p2):
    renderer.render([], [shape('circle', p1, p2)])
    _, x, y, radius, _, _, fill = surface.calls[0]
    assert (x, y) == (100.0, 400.0)
    assert radius == pytest.approx(math.hypot(100, 100))
    assert fill == DEFAULT_FILL_COLOR


def test_triangle_vertices(renderer, surface, p1, p2):
    renderer.render([], [shape('triangle', p1, p2)])
    assert surface.calls[0][1] == [(150.0, 400.0), (100.0, 300.0), (200.0, 300.0)]
    assert surface.kinds().count('circle') == 3


def test_unmapped_points_are_skipped(renderer, surface, p1, p2):
    hidden = DomainPoint(time=9999, price=50.0)
    drawn = renderer.render([line('trendline', p1, hidden), line('trendline', p1, p2, 2)], [])

    assert drawn == 1
    assert surface.kinds() == ['line', 'circle', 'circle']


def test_order_lines_shapes_texts_active(renderer, surface, p1, p2):
    active = ActiveDrawing(id=9, type='trendline', points=[p1, p2])
    text = TextDrawing(id=4, point=p2, text="Цель")

    renderer.render([line('vertical-line', p1, p2)], [shape('circle', p1, p2)], [text], active)

    kinds = surface.kinds()
    assert kinds[0] == 'line'
    assert kinds[1] == 'circle'
    assert kinds.index('text') < len(kinds) - 3
    assert kinds[-3:] == ['line', 'circle', 'circle']


def test_active_with_single_point_is_not_drawn(renderer, surface, p1):
    active = ActiveDrawing(id=1, type='rectangle', points=[p1])
    assert renderer.render([], [], active=active) == 0


def test_render_is_idempotent(renderer, surface, p1, p2):
    lines = [line('trendline', p1, p2)]
    shapes = [shape('rectangle', p1, p2)]

    renderer.render(lines, shapes)
    first = list(surface.calls)
    renderer.render(lines, shapes)

    assert surface.calls == first
    assert surface.clears == 2

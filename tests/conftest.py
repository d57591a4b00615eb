import matplotlib

matplotlib.use('Agg')

import pytest

from charting.drawing.drawing_manager import DrawingManager
from charting.drawing.models import DomainPoint


class RecordingSurface:
    """Поверхность, которая записывает вызовы вместо рисования."""

    def __init__(self, width=800, height=600):
        self.width = width
        self.height = height
        self.calls = []
        self.clears = 0
        self.flushes = 0

    def clear(self):
        self.calls = []
        self.clears += 1

    def line(self, x1, y1, x2, y2, color, width):
        self.calls.append(('line', x1, y1, x2, y2, color, width))

    def polygon(self, points, color, width, fill=None):
        self.calls.append(('polygon', list(points), color, width, fill))

    def circle(self, x, y, radius, color, width, fill=None):
        self.calls.append(('circle', x, y, radius, color, width, fill))

    def rectangle(self, x, y, width, height, color, line_width, fill=None):
        self.calls.append(('rectangle', x, y, width, height, color, line_width, fill))

    def text(self, x, y, text, color, size, background=None, align='left'):
        self.calls.append(('text', x, y, text, color, size, background, align))

    def flush(self):
        self.flushes += 1

    def kinds(self):
        return [call[0] for call in self.calls]


class DictMapper:
    """Проекция по таблицам: время и цена, которых нет в таблице, не видны."""

    def __init__(self, xs=None, ys=None, width=800, height=600):
        self.width = width
        self.height = height
        self.xs = dict(xs or {})
        self.ys = dict(ys or {})

    def time_to_x(self, time):
        return self.xs.get(time)

    def price_to_y(self, price):
        return self.ys.get(price)


class RecordingOverlay:
    def __init__(self):
        self.redraws = 0
        self.detached = False

    def redraw(self):
        self.redraws += 1

    def detach(self):
        self.detached = True


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def mapper():
    return DictMapper(
        xs={1000: 100.0, 2000: 200.0, 3000: 300.0},
        ys={50.0: 400.0, 60.0: 300.0, 70.0: 200.0},
    )


@pytest.fixture
def manager():
    return DrawingManager()


@pytest.fixture
def overlay(manager):
    recording = RecordingOverlay()
    manager.bind_overlay(recording)
    return recording


@pytest.fixture
def p1():
    return DomainPoint(time=1000, price=50.0)


@pytest.fixture
def p2():
    return DomainPoint(time=2000, price=60.0)

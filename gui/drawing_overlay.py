"""
Жизненный цикл оверлея построений.

attach() создает поверхность рисования и подписывается на изменение
видимой области ценовой панели и на изменение размера canvas. detach()
снимает все подписки и удаляет поверхность; вызывается на любом пути
выхода, в том числе при ошибке во время подключения.
"""
from contextlib import contextmanager

from loguru import logger

from charting.drawing.drawing_manager import DrawingManager
from charting.drawing.renderer import DrawingRenderer
from charting.exceptions import SurfaceUnavailableError
from gui.axes_mapper import AxesCoordinateMapper
from gui.drawing_surface import MatplotlibSurface


class DrawingOverlay:
    """
    Связывает DrawingManager с фигурой matplotlib.

    Если фигура недоступна, оверлей остается неактивным: менеджер
    продолжает работать как модель, но ничего не рисуется.
    """

    def __init__(self, figure, price_axes):
        """
        Параметры:
            figure: Фигура matplotlib.
            price_axes: Ценовая панель с датами по оси X.
        """
        self.figure = figure
        self.price_axes = price_axes
        self.manager = None
        self.surface = None
        self.renderer = None
        self._axes_callbacks = []
        self._canvas_callbacks = []

    @property
    def is_attached(self) -> bool:
        return self.surface is not None

    def attach(self, manager: DrawingManager) -> bool:
        """
        Подключает оверлей к фигуре и менеджеру.

        Возвращает:
            bool: True, если поверхность создана; False, если фигура недоступна.
        """
        if self.is_attached:
            return True

        try:
            self.surface = MatplotlibSurface.create(self.figure)
        except SurfaceUnavailableError as e:
            logger.warning(f"Инструменты рисования отключены: {e}")
            return False

        try:
            self.renderer = DrawingRenderer(self.surface, AxesCoordinateMapper(self.price_axes))
            self._axes_callbacks = [
                self.price_axes.callbacks.connect('xlim_changed', self._on_view_changed),
                self.price_axes.callbacks.connect('ylim_changed', self._on_view_changed),
            ]
            self._canvas_callbacks = [
                self.figure.canvas.mpl_connect('resize_event', self._on_resize),
            ]
            self.manager = manager
            manager.bind_overlay(self)
        except Exception:
            self.detach()
            raise

        logger.info("Оверлей построений подключен")
        self.redraw()
        return True

    def detach(self):
        """Снимает подписки и удаляет поверхность. Повторный вызов безопасен."""
        for cid in self._axes_callbacks:
            self.price_axes.callbacks.disconnect(cid)
        self._axes_callbacks = []

        if self.figure is not None and getattr(self.figure, 'canvas', None) is not None:
            for cid in self._canvas_callbacks:
                self.figure.canvas.mpl_disconnect(cid)
        self._canvas_callbacks = []

        if self.surface is not None:
            self.surface.release()
            logger.info("Оверлей построений отключен")
        self.surface = None
        self.renderer = None

        if self.manager is not None and self.manager.overlay is self:
            self.manager.bind_overlay(None)
        self.manager = None

    @contextmanager
    def attached(self, manager: DrawingManager):
        """Подключает оверлей на время блока with и гарантированно отключает его."""
        self.attach(manager)
        try:
            yield self
        finally:
            self.detach()

    def redraw(self):
        """Полная перерисовка построений."""
        if self.renderer is None or self.manager is None:
            return
        manager = self.manager
        try:
            self.renderer.render(manager.lines, manager.shapes, manager.texts, manager.active_drawing)
        except Exception as e:
            logger.error(f"Ошибка при отрисовке построений: {e}")

    def _on_view_changed(self, _axes):
        self.redraw()

    def _on_resize(self, _event):
        if self.surface is not None:
            self.surface.sync_size()
        self.redraw()

"""
Исключения подсистемы графиков.

Большинство ошибок подсистемы обрабатывается локально (пустые коллекции,
значения None). Наружу пробрасываются только ошибки API-клиента.
"""


class ChartingError(Exception):
    """Базовое исключение подсистемы графиков."""
    def __init__(self, message="Charting error"):
        super().__init__(message)


class SurfaceUnavailableError(ChartingError):
    """Поверхность для рисования недоступна (нет фигуры или canvas)."""
    def __init__(self, message="Drawing surface unavailable"):
        super().__init__(message)


class ApiError(ChartingError):
    """Ошибка HTTP-запроса к бэкенду."""
    def __init__(self, message="API error", status=None, data=None):
        super().__init__(message)
        self.status = status
        self.data = data


class ApiTimeoutError(ApiError):
    """Запрос к бэкенду не уложился в таймаут."""
    def __init__(self, message="Request timeout"):
        super().__init__(message, status=None, data=None)

"""
HTTP-клиент бэкенда графиков.

Конфигурация (базовый URL, заголовки, таймаут) хранится в объекте ApiConfig,
который создается один раз и передается клиенту. Переопределения для
отдельного запроса задаются через RequestOptions и не меняют общий объект.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

import requests
from loguru import logger

from charting.exceptions import ApiError, ApiTimeoutError

DEFAULT_HEADERS = {
    'Accept': 'application/json',
    'Content-Type': 'application/json',
}


@dataclass(frozen=True)
class ApiConfig:
    """Настройки подключения к бэкенду."""
    base_url: str = 'http://localhost:3003'
    default_headers: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))
    timeout: float = 15.0

    @classmethod
    def from_config(cls, config: dict) -> 'ApiConfig':
        """
        Создает ApiConfig из словаря CONFIG.

        Параметры:
            config: Словарь конфигурации с разделом 'API'.
        """
        api = config.get('API', {})
        api_config = cls(
            base_url=api.get('BASE_URL') or cls.base_url,
            timeout=float(api.get('TIMEOUT') or cls.timeout),
        )
        token = api.get('TOKEN')
        if token:
            api_config = api_config.with_token(token)
        return api_config

    def with_headers(self, headers: Dict[str, str]) -> 'ApiConfig':
        """Новая конфигурация с объединенными заголовками."""
        return replace(self, default_headers={**self.default_headers, **headers})

    def with_token(self, token: str) -> 'ApiConfig':
        """Новая конфигурация с заголовком Authorization."""
        return self.with_headers({'Authorization': f'Bearer {token}'})

    def without_token(self) -> 'ApiConfig':
        headers = {k: v for k, v in self.default_headers.items() if k != 'Authorization'}
        return replace(self, default_headers=headers)


@dataclass(frozen=True)
class RequestOptions:
    """Переопределения для одного запроса."""
    headers: Optional[Dict[str, str]] = None
    timeout: Optional[float] = None
    base_url: Optional[str] = None


@dataclass
class ApiResponse:
    data: Any
    status: int
    message: Optional[str] = None


class ApiClient:
    """
    Клиент для запросов к бэкенду.

    Использует requests.Session; конфигурация передается по ссылке и не
    изменяется клиентом.
    """

    def __init__(self, config: ApiConfig, session: Optional[requests.Session] = None):
        """
        Параметры:
            config: Конфигурация подключения.
            session: Сессия requests (по умолчанию создается новая).
        """
        self.config = config
        self.session = session or requests.Session()

    def build_url(self, endpoint: str, options: Optional[RequestOptions] = None) -> str:
        """
        Собирает полный URL запроса.

        Абсолютные URL (http/https) возвращаются без изменений.
        """
        if endpoint.startswith('http'):
            return endpoint
        base_url = options.base_url if options and options.base_url is not None else self.config.base_url
        clean_base = base_url[:-1] if base_url.endswith('/') else base_url
        clean_endpoint = endpoint if endpoint.startswith('/') else f'/{endpoint}'
        return f'{clean_base}{clean_endpoint}'

    def build_headers(self, options: Optional[RequestOptions] = None) -> Dict[str, str]:
        headers = dict(self.config.default_headers)
        if options and options.headers:
            headers.update(options.headers)
        return headers

    def _timeout(self, options: Optional[RequestOptions]) -> float:
        if options and options.timeout:
            return options.timeout
        return self.config.timeout

    def request(self, method: str, endpoint: str, data: Any = None,
                options: Optional[RequestOptions] = None, params: Optional[dict] = None) -> ApiResponse:
        """
        Выполняет HTTP-запрос.

        Параметры:
            method: HTTP метод ('GET', 'POST', ...).
            endpoint: Путь относительно base_url или абсолютный URL.
            data: Тело запроса (сериализуется в JSON).
            options: Переопределения заголовков, таймаута и base_url.
            params: Параметры строки запроса.

        Возвращает:
            ApiResponse: Данные ответа и статус.

        Исключения:
            ApiTimeoutError: Истек таймаут.
            ApiError: Ошибка сети или HTTP статус вне 2xx.
        """
        url = self.build_url(endpoint, options)
        try:
            response = self.session.request(
                method,
                url,
                headers=self.build_headers(options),
                json=data,
                params=params,
                timeout=self._timeout(options),
            )
        except requests.exceptions.Timeout as e:
            logger.error(f"Таймаут запроса {method} {url}: {e}")
            raise ApiTimeoutError() from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Ошибка запроса {method} {url}: {e}")
            raise ApiError(str(e)) from e

        return self._handle_response(response)

    def _handle_response(self, response: requests.Response) -> ApiResponse:
        content_type = response.headers.get('content-type', '')
        try:
            if 'application/json' in content_type:
                data = response.json()
            else:
                data = response.text
        except ValueError:
            data = None

        message = data.get('message') if isinstance(data, dict) else None

        if not response.ok:
            error = data.get('error') if isinstance(data, dict) else None
            error_message = message or error or f"HTTP {response.status_code}: {response.reason}"
            logger.error(f"Ответ с ошибкой от {response.url}: {error_message}")
            raise ApiError(error_message, status=response.status_code, data=data)

        return ApiResponse(data=data, status=response.status_code, message=message)

    def get(self, endpoint: str, options: Optional[RequestOptions] = None, params: Optional[dict] = None) -> ApiResponse:
        return self.request('GET', endpoint, options=options, params=params)

    def post(self, endpoint: str, data: Any = None, options: Optional[RequestOptions] = None) -> ApiResponse:
        return self.request('POST', endpoint, data=data, options=options)

    def put(self, endpoint: str, data: Any = None, options: Optional[RequestOptions] = None) -> ApiResponse:
        return self.request('PUT', endpoint, data=data, options=options)

    def patch(self, endpoint: str, data: Any = None, options: Optional[RequestOptions] = None) -> ApiResponse:
        return self.request('PATCH', endpoint, data=data, options=options)

    def delete(self, endpoint: str, options: Optional[RequestOptions] = None) -> ApiResponse:
        return self.request('DELETE', endpoint, options=options)

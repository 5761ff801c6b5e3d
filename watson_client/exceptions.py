"""
Исключения клиента
"""

from typing import Any, List, Optional


class WatsonClientError(Exception):
    """Базовое исключение клиента"""


class MissingParamsError(WatsonClientError):
    """Не переданы обязательные параметры. Обнаруживается до любого I/O"""

    kind = "missing_required_parameters"

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(
            "Missing required parameters: " + ", ".join(self.missing)
        )


class TemplateExpansionError(WatsonClientError):
    """Ошибка подстановки path параметров - дефект метода, а не рабочая ситуация"""

    def __init__(self, key: str, template: str):
        self.key = key
        self.template = template
        super().__init__(f"Path parameter '{key}' is not set for template {template}")


class SendRequestError(WatsonClientError):
    def __init__(
        self,
        message: str,
        path: str,
        status_code: Optional[int] = None,
        response_data: Any = None,
    ):
        self.message = message
        self.path = path
        self.status_code = status_code
        self.response_data = response_data
        super().__init__(f"[{status_code}] {path}: {message}")


class TransportError(SendRequestError):
    """Сетевая ошибка или таймаут транспорта"""


class RemoteError(SendRequestError):
    """Сервис ответил статусом вне диапазона 2xx"""

    def __init__(
        self,
        message: str,
        path: str,
        status_code: int,
        response_data: Any = None,
        response: Any = None,
    ):
        super().__init__(message, path, status_code, response_data)
        self.response = response

    @property
    def code(self) -> int:
        return self.status_code

    @classmethod
    def from_response(cls, path: str, response: Any, body: Any) -> "RemoteError":
        """Сборка ошибки из ответа сервиса с извлечением сообщения из тела"""
        status_code = response.status_code
        message = None

        if isinstance(body, dict):
            for key in ("error", "message", "description", "errorMessage"):
                value = body.get(key)
                if isinstance(value, dict):
                    value = value.get("message") or value.get("description")
                if value:
                    message = str(value)
                    break
        elif isinstance(body, str) and body.strip():
            message = body.strip()

        if status_code == 401:
            message = "Unauthorized: Access is denied due to invalid credentials"
        elif not message:
            message = f"Request failed with status {status_code}"

        return cls(message, path, status_code, response_data=body, response=response)

from __future__ import annotations


class FacadeError(Exception):
    """Base class of every error raised by the facade itself.

    Errors raised by the wrapped rtc objects are never converted into
    facade errors; they reach the caller unchanged.
    """

    code = "FACADE_ERROR"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ClassificationError(FacadeError, TypeError):
    code = "RTC_UNKNOWN_CATEGORY"


class UntranslatableEnumValue(FacadeError, ValueError):
    code = "RTC_UNTRANSLATABLE_VALUE"


class IncompleteEnumMapping(FacadeError, TypeError):
    code = "RTC_INCOMPLETE_MAPPING"


class ModuleNotReadyError(FacadeError, RuntimeError):
    code = "RTC_MODULE_NOT_READY"


class NotFoundError(FacadeError, LookupError):
    code = "NOT_FOUND"


class FacadeNotImplementedError(FacadeError, NotImplementedError):
    code = "NOT_IMPLEMENTED"


class ConfigurationError(FacadeError, ValueError):
    code = "INVALID_CONFIGURATION"

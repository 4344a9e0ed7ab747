"""Ошибки предметной области: загрузка фона и экспорт."""
from __future__ import annotations


class LenartError(Exception):
    """Базовая ошибка приложения, показывается пользователю."""


class DecodeFailure(LenartError):
    """Данные не удалось распознать как изображение."""


class ExportError(LenartError):
    """Экспорт не выполнен; документ при этом не меняется."""


class EncodeFailure(ExportError):
    """Не удалось закодировать или записать PNG."""


class SinkUnavailable(ExportError):
    """Не удалось получить поток для записи."""


class UnsizedDocumentError(ExportError):
    """Холст ещё не сообщил свой размер, экспорт невозможен."""

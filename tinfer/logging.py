from datetime import datetime, timezone
import inspect
import json
import logging
import pathlib
from typing import Dict, Tuple


class TinferLogger:
    """Wraps a logging.Logger so that it's easy to use str.format syntax."""

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def debug(
        self, format_string: str, *args: object, **kwargs: object
    ) -> None:
        self._log(logging.DEBUG, format_string, args, kwargs)

    def info(
        self, format_string: str, *args: object, **kwargs: object
    ) -> None:
        self._log(logging.INFO, format_string, args, kwargs)

    def warning(
        self, format_string: str, *args: object, **kwargs: object
    ) -> None:
        self._log(logging.WARNING, format_string, args, kwargs)

    def error(
        self, format_string: str, *args: object, **kwargs: object
    ) -> None:
        self._log(logging.ERROR, format_string, args, kwargs)

    def _log(
        self,
        level: int,
        format_string: str,
        args: Tuple[object, ...],
        kwargs: Dict[str, object],
    ) -> None:
        # Walking the stack is slow, so skip it for dropped records.
        if not self._logger.isEnabledFor(level):
            return
        exc_info = kwargs.pop('exc_info', None)
        # Two frames up: past _log and the public method.
        caller = inspect.stack(context=0)[2]
        self._logger.log(
            level,
            _FormatMessage(format_string, args, kwargs),
            exc_info=exc_info,
            extra={'caller': caller},
        )


class _FormatMessage:
    """A str.format message, rendered only when a handler emits it."""

    def __init__(
        self,
        format_string: str,
        args: Tuple[object, ...],
        kwargs: Dict[str, object],
    ) -> None:
        self.format_string = format_string
        self.args = args
        self.kwargs = kwargs

    def __str__(self) -> str:
        return self.format_string.format(*self.args, **self.kwargs)


def _source_location(record: logging.LogRecord) -> Dict[str, object]:
    caller = getattr(record, 'caller', None)
    if caller is None:
        path_name = record.pathname
        module = record.module
        line_number = record.lineno
        function_name = record.funcName
    else:
        path_name = caller.filename
        module = caller.frame.f_globals['__name__']
        line_number = caller.lineno
        function_name = caller.function
    return {
        'path_name': path_name,
        'file_name': pathlib.Path(path_name).name,
        'module': module,
        'line_number': line_number,
        'function_name': function_name,
    }


class JSONFormatter(logging.Formatter):
    """Renders each record as a single line of JSON.

    Records logged through a TinferLogger report the code that called the
    logger, not the wrapper itself.
    """

    def format(self, record: logging.LogRecord) -> str:
        fields: Dict[str, object] = {
            'name': record.name,
            'level_name': record.levelname,
            'message': record.getMessage(),
        }
        fields.update(_source_location(record))
        fields['created'] = datetime.fromtimestamp(
            record.created, timezone.utc
        ).isoformat()
        fields['thread'] = record.thread
        fields['thread_name'] = record.threadName
        fields['process'] = record.process
        fields['process_name'] = record.processName
        fields['exception'] = (
            self.formatException(record.exc_info)
            if record.exc_info
            else None
        )
        return json.dumps(fields)

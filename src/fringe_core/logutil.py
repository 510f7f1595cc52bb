import logging
import re
from typing import Iterable, Union


class RedactingFilter(logging.Filter):
    """Mask signing-key material in log records."""

    _PATTERNS = (
        (re.compile(r"(sk_b64|sk|secret|private_key)=\S+", re.IGNORECASE), r"\1=***"),
        (re.compile(r"(-----BEGIN [A-Z ]*PRIVATE KEY-----).*?(-----END)", re.DOTALL), r"\1***\2"),
    )

    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage()
        for pattern, repl in self._PATTERNS:
            msg = pattern.sub(repl, msg)
        record.msg = msg
        record.args = None
        return True


def setup_logging(
    level: Union[int, str] = logging.INFO,
    loggers: Iterable[str] = ("fringe_core", "fringe_cli"),
) -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(
        level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    f = RedactingFilter()
    # logger filters do not see records propagated from child loggers
    for handler in logging.getLogger().handlers:
        _add_once(handler, f)
    for name in loggers:
        lg = logging.getLogger(name)
        lg.setLevel(level)
        _add_once(lg, f)


def _add_once(target: logging.Filterer, f: RedactingFilter) -> None:
    if not any(isinstance(x, RedactingFilter) for x in target.filters):
        target.addFilter(f)

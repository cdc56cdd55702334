from __future__ import annotations
import logging
import re

API_KEY_RE = re.compile(r"\b(sk-)([A-Za-z0-9_\-]{8,})")
EMAIL_RE = re.compile(r"([A-Za-z0-9._%+-]+)@([A-Za-z0-9.-]+\.[A-Za-z]{2,})")

_TRACEBACK_FORMATTER = logging.Formatter()


def mask_secrets(text: str) -> str:
    text = API_KEY_RE.sub(r"\1***", text)
    return EMAIL_RE.sub(r"\1@***", text)


class SecretMask(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = mask_secrets(record.msg)
        if record.args and isinstance(record.args, tuple):
            record.args = tuple(mask_secrets(a) if isinstance(a, str) else a for a in record.args)
        # Formatter reuses exc_text when set, so the masked traceback is what gets printed
        if record.exc_info and not record.exc_text:
            record.exc_text = _TRACEBACK_FORMATTER.formatException(record.exc_info)
        if record.exc_text:
            record.exc_text = mask_secrets(record.exc_text)
        return True


def setup_logger(level: str = "INFO", json_mode: bool = False) -> logging.Logger:
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    # clear handlers
    for h in list(logger.handlers):
        logger.removeHandler(h)

    h = logging.StreamHandler()
    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    if json_mode:
        fmt = '{"ts":"%(asctime)s","lvl":"%(levelname)s","logger":"%(name)s","msg":"%(message)s"}'
    f = logging.Formatter(fmt, datefmt="%Y-%m-%d %H:%M:%S")
    h.setFormatter(f)
    h.addFilter(SecretMask())
    logger.addHandler(h)

    for noisy in ("httpx", "httpcore", "openai", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
    return logger

import logging
import sys

# Bibliothèques trop bavardes en INFO
_NOISY_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore")

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """
    Configure le logging une seule fois pour toute l'application.

    Un handler console sur stderr, format horodaté à la milliseconde.
    Les appels suivants ne font que mettre à jour le niveau.
    """
    global _configured

    root = logging.getLogger()
    root.setLevel(level)

    if _configured:
        return

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(fmt)
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.captureWarnings(True)
    _configured = True

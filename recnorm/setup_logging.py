import logging, sys

def setup_logging(level: str = "INFO"):
    logger = logging.getLogger()
    if logger.handlers:  # don't double add when called twice in one process
        return
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    # stdout carries the normalized CSV, diagnostics go to stderr
    h = logging.StreamHandler(sys.stderr)
    fmt = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s :: %(message)s"
    )
    h.setFormatter(fmt)
    logger.addHandler(h)

import logging

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'
HANDLER_NAME = 'blobstore'


def configure_logging(level: str = 'info') -> None:
    """Install a single stream handler on the root logger."""
    root = logging.getLogger()
    root.setLevel(level.upper())
    if not any(h.get_name() == HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler()
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

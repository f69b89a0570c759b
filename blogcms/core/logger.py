import logging

LOG_FORMAT = "%(asctime)s - %(process)d - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "info"):
    root = logging.getLogger("blogcms")
    root.setLevel(level.upper())
    # create_app may run more than once in one process (tests)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(handler)
    return root

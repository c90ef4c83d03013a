# -*- coding: utf-8 -*-
import logging
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("markgeom")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

# library code never configures output; applications attach handlers
logging.getLogger(__name__).addHandler(logging.NullHandler())

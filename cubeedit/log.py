import logging

LOGGER = logging.getLogger("cubeedit")

"""Loading the configured mappings library.

The library is named in configuration as ``module:attribute``. The
attribute may be a ready library object, a class, or a factory function
returning a library.
"""

import importlib
import logging

from mappingsbot.core.errors import ConfigError
from mappingsbot.core.ports import MappingsLibrary

logger = logging.getLogger(__name__)


def load_library(path: str | None) -> MappingsLibrary:
    """Import and instantiate the mappings library.

    Args:
        path: Import path in ``module:attribute`` form.

    Returns:
        The mappings library.

    Raises:
        ConfigError: If no library is configured, it cannot be imported, or
            the result does not implement MappingsLibrary.
    """
    if not path:
        msg = "No mappings library configured. Set 'library' in the [settings] section."
        raise ConfigError(msg)

    module_name, sep, attribute = path.partition(":")
    if not sep or not module_name or not attribute:
        raise ConfigError(f"Invalid library path {path!r}, expected 'module:attribute'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"Cannot import mappings library module {module_name!r}: {e}") from e

    try:
        target = getattr(module, attribute)
    except AttributeError:
        raise ConfigError(f"Module {module_name!r} has no attribute {attribute!r}") from None

    if isinstance(target, MappingsLibrary) and not isinstance(target, type):
        library = target
    elif callable(target):
        library = target()
    else:
        library = target

    if not isinstance(library, MappingsLibrary):
        raise ConfigError(f"{path!r} does not provide a MappingsLibrary")

    logger.debug("Loaded mappings library %s", path)
    return library

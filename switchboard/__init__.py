__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'switchboard'
__author__ = 'Eiko Reishin (影皇嶺臣)'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .commandline import *
from .faults import *
from .formatter import *
from .options import *
from .parser import *
from .patterns import *
from .validator import *
from .values import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the parse results
__all__ += commandline.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the help formatter
__all__ += formatter.__all__  # type: ignore[attr-defined]
# Load the exposed API of the option catalog
__all__ += options.__all__  # type: ignore[attr-defined]
# Load the exposed API of the parser
__all__ += parser.__all__  # type: ignore[attr-defined]
# Load the exposed API of the pattern builder
__all__ += patterns.__all__  # type: ignore[attr-defined]
# Load the exposed API of the option validator
__all__ += validator.__all__  # type: ignore[attr-defined]
# Load the exposed API of the value kinds
__all__ += values.__all__  # type: ignore[attr-defined]

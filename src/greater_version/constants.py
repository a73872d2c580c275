"""Constants used in the greater-version package."""

# Local source tree, relative to the project root
DEFAULT_SOURCE_ROOT = "lib"
DEFAULT_SOURCE_EXTENSION = ".py"

# Files inspected, in this order, when a module reference points to a package
# directory instead of a single module file
PACKAGE_VERSION_FILES = ("__init__.py", "version.py", "_version.py", "__about__.py")

# Names of module-level assignments holding the declared version
DEFAULT_VERSION_IDENTIFIERS = ["__version__", "VERSION", "version"]

# "pkg.module" as well as "Pkg::Module"
MODULE_SEPARATOR_PATTERN = r"::|\."

# sys.path entries matching any of these are never consulted for the
# installed version (build output may shadow the installed copy)
DEFAULT_EXCLUDED_PATH_PATTERNS = [
    r"(^|[\\/])build([\\/]|$)",
    r"(^|[\\/])blib([\\/]|$)",
]

DEFAULT_REGISTRY_NAME = "PyPI"
DEFAULT_REGISTRY_URL = "https://pypi.org/pypi"
DEFAULT_REGISTRY_TIMEOUT = 10

# Reasons carried by absence results
REASON_NO_MODULE_NAME = "You didn't specify a module name"
REASON_INVALID_MODULE_NAME = "invalid module name"
REASON_FILE_NOT_FOUND = "file not found"
REASON_NO_VERSION = "no version declared"
REASON_NOT_INSTALLED = "not installed"
REASON_NOT_ON_REGISTRY = "not found on registry"
REASON_LOOKUP_FAILED = "lookup failed"
REASON_READ_FAILED = "read failed"
REASON_UNPARSABLE = "unparsable version"

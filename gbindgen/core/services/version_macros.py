"""
Version macros — the preprocessor block injected after the includes.

Pure functions, no I/O: the same namespace and version always produce
byte-identical text.
"""

from __future__ import annotations

import re

from gbindgen.core.errors import NamespaceMissingError
from gbindgen.core.models.package import SemanticVersion

# Acronym run before a capitalised word | capitalised/lower word | upper/digit run
_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z0-9]+|[A-Z0-9]+")

_MACRO_TEMPLATE = """
#define {ns}_MAJOR_VERSION {major}
#define {ns}_MINOR_VERSION {minor}
#define {ns}_MICRO_VERSION {micro}

#define {ns}_CHECK_VERSION(major,minor,micro) \\
    ({ns}_MAJOR_VERSION > (major) ||                                   \\
     ({ns}_MAJOR_VERSION == (major) && {ns}_MINOR_VERSION > (minor)) || \\
     ({ns}_MAJOR_VERSION == (major) && {ns}_MINOR_VERSION == (minor) && \\
      {ns}_MICRO_VERSION >= (micro)))
"""


def shouty_snake_case(name: str) -> str:
    """Convert an identifier to UPPER_SNAKE_CASE.

    ``"my-lib"`` → ``MY_LIB``, ``"MyLib"`` → ``MY_LIB``,
    ``"HTTPServer"`` → ``HTTP_SERVER``, ``"MYLIB"`` → ``MYLIB``.
    """
    return "_".join(word.upper() for word in _WORD_RE.findall(name))


def compose_version_macros(namespace: str | None, version: SemanticVersion) -> str:
    """Build the version constants and ``CHECK_VERSION`` macro block.

    Raises:
        NamespaceMissingError: If *namespace* is missing, is not ASCII or
            has no usable characters, since the macro names cannot be formed.
    """
    if not namespace:
        raise NamespaceMissingError(
            "No namespace configured: set 'namespace' in gbindgen.toml "
            "to generate the version macros."
        )

    if not namespace.isascii():
        raise NamespaceMissingError(
            f"Namespace {namespace!r} must be ASCII to form C macro names."
        )

    ns = shouty_snake_case(namespace)
    if not ns:
        raise NamespaceMissingError(f"Namespace {namespace!r} yields no macro prefix.")

    return _MACRO_TEMPLATE.format(
        ns=ns,
        major=version.major,
        minor=version.minor,
        micro=version.patch,
    )


def check_version(version: SemanticVersion, major: int, minor: int, micro: int) -> bool:
    """Evaluate ``CHECK_VERSION(major, minor, micro)`` for *version*."""
    m, n, p = version.triple
    return m > major or (m == major and n > minor) or (m == major and n == minor and p >= micro)

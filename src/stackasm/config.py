"""
stackasm - Configuration
========================

Front-end options. Configuration can come from:
- Default values (defined here)
- Keyword arguments when constructing ``FrontEndConfig``
- Environment variables, via ``FrontEndConfig.from_env()``

Environment variables:
- STACKASM_CASE_SENSITIVE: 1/0, true/false, yes/no
- STACKASM_EOF_POLICY: implicit-eol or report
- STACKASM_COMMENT_MARKER: a single character
- STACKASM_ENCODING: a Python codec name
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Mapping, Optional
import codecs
import os

from stackasm.errors import ConfigError


class EofPolicy(Enum):
    """
    What to do with a line that is still open when the input ends.

    IMPLICIT_EOL: finish the line as if a line terminator had been read.
    REPORT: record "Missing line terminator." and drop the line.
    """
    IMPLICIT_EOL = "implicit-eol"
    REPORT = "report"


_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _parse_bool(name: str, value: str) -> bool:
    folded = value.strip().lower()
    if folded in _TRUE_VALUES:
        return True
    if folded in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name}: expected a boolean, got '{value}'")


@dataclass(frozen=True)
class FrontEndConfig:
    """
    Configuration for a front-end run.

    Attributes:
        case_sensitive: Match mnemonics exactly (default: True)
        eof_policy: Handling of an unterminated last line (default: IMPLICIT_EOL)
        comment_marker: Character that starts a comment (default: ";")
        encoding: Text encoding of source files (default: "utf-8")
    """

    case_sensitive: bool = True
    eof_policy: EofPolicy = EofPolicy.IMPLICIT_EOL
    comment_marker: str = ";"
    encoding: str = "utf-8"

    def __post_init__(self):
        if len(self.comment_marker) != 1:
            raise ConfigError(
                f"comment marker must be a single character, got {self.comment_marker!r}"
            )
        if self.comment_marker.isalnum() or self.comment_marker in "-\n":
            raise ConfigError(
                f"comment marker {self.comment_marker!r} would be read as part of another token"
            )
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ConfigError(f"unknown encoding '{self.encoding}'") from None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "FrontEndConfig":
        """
        Build a configuration from STACKASM_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ (for tests)

        Raises:
            ConfigError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ
        config = cls()

        if "STACKASM_CASE_SENSITIVE" in env:
            config = replace(
                config,
                case_sensitive=_parse_bool("STACKASM_CASE_SENSITIVE", env["STACKASM_CASE_SENSITIVE"]),
            )

        if "STACKASM_EOF_POLICY" in env:
            value = env["STACKASM_EOF_POLICY"].strip().lower()
            try:
                config = replace(config, eof_policy=EofPolicy(value))
            except ValueError:
                choices = ", ".join(p.value for p in EofPolicy)
                raise ConfigError(
                    f"STACKASM_EOF_POLICY: expected one of {choices}, got '{value}'"
                ) from None

        if "STACKASM_COMMENT_MARKER" in env:
            config = replace(config, comment_marker=env["STACKASM_COMMENT_MARKER"])

        if "STACKASM_ENCODING" in env:
            config = replace(config, encoding=env["STACKASM_ENCODING"].strip())

        return config

"""Generation configuration.

GenerationOptions is a frozen dataclass. It is immutable after creation and
safe to share between generators and threads.
"""

from dataclasses import dataclass
from enum import Enum


class UriKind(Enum):
    """Whether generated output carries the scheme and host."""

    ABSOLUTE = "absolute"
    RELATIVE = "relative"


@dataclass(frozen=True, slots=True)
class GenerationOptions:
    """Options shared by the template and URL generators.

    All fields have sensible defaults. Override what you need::

        options = GenerationOptions(uri_kind=UriKind.RELATIVE)
        options = GenerationOptions(base_uri="https://api.example.com/v1/")
    """

    uri_kind: UriKind = UriKind.ABSOLUTE

    # Explicit base for absolute output; takes precedence over the request
    base_uri: str | None = None

    # Query keys are emitted lower-cased (``Bar.Abc`` -> ``bar.abc``)
    lowercase_keys: bool = True


DEFAULT_OPTIONS = GenerationOptions()

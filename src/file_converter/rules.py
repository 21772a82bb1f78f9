"""Table of allowed conversions per source MIME type."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from file_converter import formats
from file_converter.errors import MissingFormatDescriptorError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionRule:
    """Allowed target extensions for one source MIME type."""

    source_mime: str
    targets: tuple[str, ...]

    def matches(self, mime_type: str) -> bool:
        return mime_type.startswith(self.source_mime)


CONVERSION_RULES: tuple[ConversionRule, ...] = (
    ConversionRule("text/plain", ("pdf", "html", "markdown")),
    ConversionRule("application/pdf", ("text", "docx")),
    ConversionRule("image/jpeg", ("png", "gif", "bmp", "webp")),
    ConversionRule("image/png", ("jpeg", "gif", "bmp", "webp")),
    ConversionRule("image/gif", ("png", "jpeg", "bmp", "webp")),
    ConversionRule("image/bmp", ("png", "jpeg", "gif", "webp")),
    ConversionRule("image/webp", ("png", "jpeg", "gif", "bmp")),
)


def validate_rules(rules: Iterable[ConversionRule]) -> None:
    """Ensure every target referenced by ``rules`` exists in the registry.

    Raises
    ------
    MissingFormatDescriptorError
        If a rule names an extension the registry does not know.
    """
    for rule in rules:
        for target in rule.targets:
            if formats.by_extension(target) is None:
                raise MissingFormatDescriptorError(
                    f"Conversion rule for {rule.source_mime} references "
                    f"unknown target extension '{target}'."
                )


validate_rules(CONVERSION_RULES)


def find_rule(source_mime: str | None) -> ConversionRule | None:
    """Return the first rule whose key prefixes ``source_mime``."""
    if not source_mime:
        return None
    for rule in CONVERSION_RULES:
        if rule.matches(source_mime):
            return rule
    return None


def get_available_targets(source_mime: str | None) -> tuple[str, ...]:
    """Return allowed target extensions for ``source_mime`` in table order.

    An unknown or empty MIME type yields an empty tuple.
    """
    rule = find_rule(source_mime)
    targets = rule.targets if rule is not None else ()
    logger.debug("available targets for %r: %s", source_mime, list(targets))
    return targets


def is_supported_pair(source_mime: str | None, target: str) -> bool:
    """Return ``True`` when the rule table allows ``source_mime`` -> ``target``."""
    return formats.normalize_extension(target) in get_available_targets(source_mime)

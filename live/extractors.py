"""Extraction rules for the values embedded in the Live login page

The login page is not a versioned contract, each rule is isolated here so it
can be tested and swapped on its own when the markup changes.
"""

import re
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Pattern


@dataclass(frozen=True)
class ParameterExtractor:
    """Named regular expression capturing a single value from page content

    Attributes:
        name: Parameter name, used as key in the extracted mapping
        pattern: Compiled pattern, group 1 is the value
    """
    name: str
    pattern: Pattern[str]

    def extract(self, content: str) -> Optional[str]:
        """Return the first captured value, or None when absent"""
        match = self.pattern.search(content or "")
        if match is None or not match.group(1):
            return None
        return match.group(1)


# Hidden input value, possibly inside a JS string with escaped quotes
PPFT_EXTRACTOR = ParameterExtractor(
    name="PPFT",
    pattern=re.compile(r'name=\\?"PPFT\\?"[^>]*value=\\?"([^"\\]+)\\?"', re.IGNORECASE),
)

# ServerData form target, quoted or not, single or double quotes
URL_POST_EXTRACTOR = ParameterExtractor(
    name="urlPost",
    pattern=re.compile(r'\\?[\'"]?urlPost\\?[\'"]?:\s*\\?[\'"]([^\'"\\]+)\\?[\'"]', re.IGNORECASE),
)

DEFAULT_EXTRACTORS = (PPFT_EXTRACTOR, URL_POST_EXTRACTOR)


def extract_parameters(
    content: str,
    extractors: Iterable[ParameterExtractor] = DEFAULT_EXTRACTORS,
) -> Dict[str, Optional[str]]:
    """Run every extractor against page content

    Args:
        content: Raw HTML/JS body
        extractors: Rules to apply

    Returns:
        Mapping of extractor name to captured value (None when not found)
    """
    return {extractor.name: extractor.extract(content) for extractor in extractors}


def extract_ppft(content: str) -> Optional[str]:
    return PPFT_EXTRACTOR.extract(content)


def extract_url_post(content: str) -> Optional[str]:
    return URL_POST_EXTRACTOR.extract(content)

"""
Format Template - "{name}" placeholder substitution for block text.

Only "{word}" is a placeholder; other braces are literal text. Templates
are validated once when parsed (an opening brace that is never closed is
an error); rendering never fails. Placeholders without a value are left
in the output untouched.
"""
import re
from typing import Dict, List, Tuple

from ..errors import MpdBarError

_PLACEHOLDER = re.compile(r'\{(\w+)\}')


class TemplateError(MpdBarError):
    """The template string is structurally invalid."""


class FormatTemplate:
    """A parsed format string."""

    def __init__(self, tokens: List[Tuple[bool, str]]):
        # (is_placeholder, literal text or placeholder name)
        self.tokens = tokens

    @classmethod
    def from_string(cls, text: str) -> 'FormatTemplate':
        last_open = text.rfind('{')
        if last_open != -1 and text.find('}', last_open) == -1:
            raise TemplateError(f'Unclosed "{{" at position {last_open} in {text!r}')

        tokens = []
        pos = 0
        for match in _PLACEHOLDER.finditer(text):
            if match.start() > pos:
                tokens.append((False, text[pos:match.start()]))
            tokens.append((True, match.group(1)))
            pos = match.end()
        if pos < len(text):
            tokens.append((False, text[pos:]))
        return cls(tokens)

    @property
    def placeholders(self) -> List[str]:
        return [value for is_placeholder, value in self.tokens if is_placeholder]

    def render(self, values: Dict[str, str]) -> str:
        parts = []
        for is_placeholder, value in self.tokens:
            if not is_placeholder:
                parts.append(value)
            elif value in values:
                parts.append(str(values[value]))
            else:
                parts.append('{' + value + '}')
        return ''.join(parts)

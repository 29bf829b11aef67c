#!/usr/bin/env python3
"""
Android strings.xml writer.

Output structure:
```xml
<?xml version="1.0" encoding="utf-8"?>
<!-- values-de/strings.xml: 2 items -->
<resources>
    <!-- General -->
    <string name="key_ok">OK</string>
    <string name="key_terms">Lies die <![CDATA[<b>AGB</b>]]></string>
</resources>
```
"""

import re
from pathlib import Path
from typing import Optional

from ..model import Platform
from .base import Translation, TranslationWriter, parse_cdata_parts, section_changes

UNESCAPED_APOSTROPHE = re.compile(r"(?<!\\)'")
# written as escapes; raw whitespace is collapsed by Android
CONTROL_ESCAPES = (('\n', '\\n'), ('\t', '\\t'))


def escape_apostrophes(text: str) -> str:
    """Prefix every apostrophe not already escaped with a backslash."""
    return UNESCAPED_APOSTROPHE.sub(r"\\'", text)


def _escape_xml(text: str) -> str:
    text = text.replace('&', '&amp;')
    text = text.replace('<', '&lt;')
    text = text.replace('>', '&gt;')
    return text


def _escape_attribute(text: str) -> str:
    return _escape_xml(text).replace('"', '&quot;')


def _comment(text: str) -> str:
    # "--" is not allowed inside XML comments
    return f"<!-- {text.replace('--', '- -')} -->"


def format_string_body(text: str) -> str:
    """
    Android string resource body for a translation.

    Apostrophes are escaped everywhere and so are line breaks
    and tabs. CDATA sections are kept verbatim while the text around them
    is XML-escaped.
    """
    text = escape_apostrophes(text)
    for char, escaped in CONTROL_ESCAPES:
        text = text.replace(char, escaped)

    parts = []
    for is_cdata, part in parse_cdata_parts(text):
        if is_cdata:
            parts.append(f'<![CDATA[{part}]]>')
        else:
            parts.append(_escape_xml(part))
    return ''.join(parts)


class AndroidXmlWriter(TranslationWriter):
    """Writes <module>/src/main/res/values[-<code>]/strings.xml files."""

    @property
    def platform(self) -> Platform:
        return Platform.ANDROID

    def requires_language_code(self, language: str) -> bool:
        # the default language goes to the plain "values" folder
        return language != self.default_language

    def output_path_template(
        self,
        module_path: str,
        language: str,
        default_language: str,
        language_code: Optional[str],
    ) -> Path:
        values_folder = 'values'
        if language != default_language:
            values_folder += f'-{language_code}'
        return Path(module_path) / 'src' / 'main' / 'res' / values_folder / 'strings.xml'

    def render(self, translations: list[Translation], path: Path) -> str:
        lines = [
            '<?xml version="1.0" encoding="utf-8"?>',
            _comment(f'{path.parent.name}/{path.name}: {len(translations)} items'),
            '<resources>',
        ]

        for section, translation in section_changes(translations):
            if section is not None:
                lines.append(f'    {_comment(section)}')
            body = format_string_body(translation.text)
            lines.append(f'    <string name="{_escape_attribute(translation.key)}">{body}</string>')

        lines.append('</resources>')
        return '\n'.join(lines) + '\n'

"""
Style declaration store.

Keeps the resolved longhand values of one declaration block and merges the
output of the property parser into it. Rejected values are ignored, the way
browsers drop malformed declarations.
"""

import logging
from typing import Dict, Iterator, List, Optional, Tuple

import tinycss2

from .properties import PropertyParser, PropertyValue

logger = logging.getLogger(__name__)


def parse_declaration_block(css_text: str) -> List[Tuple[str, str, bool]]:
    """
    Split a declaration block into declarations.

    Args:
        css_text: Declarations such as ``margin: 0; float: left !important``

    Returns:
        List of (property name, raw value, important) tuples in source order
    """
    declarations = []
    if not css_text:
        return declarations

    for node in tinycss2.parse_blocks_contents(css_text, skip_comments=True, skip_whitespace=True):
        if node.type == 'declaration':
            value = tinycss2.serialize(node.value).strip()
            declarations.append((node.lower_name, value, node.important))
        elif node.type == 'error':
            logger.debug(f"Skipping invalid declaration: {node.message}")

    return declarations


class CSSStyleDeclaration:
    """
    Store of longhand property values.

    Shorthands are expanded on write, so only longhands are ever stored.
    """

    def __init__(self, css_text: str = '', parser: Optional[PropertyParser] = None):
        """
        Initialize the declaration.

        Args:
            css_text: Optional declaration block to start from
            parser: Property parser to use, defaults to one with default options
        """
        self._parser = parser or PropertyParser()
        self._properties: Dict[str, PropertyValue] = {}
        if css_text:
            self.css_text = css_text

    @property
    def parser(self) -> PropertyParser:
        return self._parser

    @property
    def css_text(self) -> str:
        """Serialize the stored longhands as a declaration block."""
        declarations = []
        for name, property_value in self._properties.items():
            priority = ' !important' if property_value.important else ''
            declarations.append(f'{name}: {property_value.value}{priority};')
        return ' '.join(declarations)

    @css_text.setter
    def css_text(self, css_text: str) -> None:
        self._properties.clear()
        for name, value, important in parse_declaration_block(css_text):
            self.set_property(name, value, 'important' if important else '')

    def set_property(self, property_name: str, value: str, priority: str = '') -> bool:
        """
        Set a property, expanding shorthands into their longhands.

        An empty value removes the property.

        Args:
            property_name: CSS property name
            value: Raw property value
            priority: ``'important'`` or an empty string

        Returns:
            bool: False if the value was rejected and nothing changed
        """
        if not property_name or not property_name.strip():
            raise ValueError("Property name must not be empty")

        if not value or not value.strip():
            self.remove_property(property_name)
            return True

        important = priority.strip().lower() == 'important'
        properties = self._parser.parse(property_name, value, important)
        if properties is None:
            logger.debug(f"Ignoring invalid declaration '{property_name}: {value}'")
            return False

        self._properties.update(properties)
        return True

    def get_property_value(self, property_name: str) -> str:
        """
        Get the value of a longhand.

        Returns:
            str: Stored value, or an empty string
        """
        property_value = self._properties.get(property_name.strip().lower())
        return property_value.value if property_value else ''

    def get_property_priority(self, property_name: str) -> str:
        """
        Get the priority of a longhand.

        Returns:
            str: ``'important'`` or an empty string
        """
        property_value = self._properties.get(property_name.strip().lower())
        return 'important' if property_value and property_value.important else ''

    def remove_property(self, property_name: str) -> str:
        """
        Remove a property.

        Removing a shorthand removes every longhand it expands to.

        Args:
            property_name: CSS property name

        Returns:
            str: Previous value of a removed longhand, or an empty string
        """
        name = property_name.strip().lower()
        longhands = self._parser.longhands(name)
        if longhands:
            for longhand in longhands:
                self._properties.pop(longhand, None)
            return ''

        removed = self._properties.pop(name, None)
        return removed.value if removed else ''

    def item(self, index: int) -> str:
        """Return the name of the longhand at ``index``, or an empty string."""
        if 0 <= index < len(self._properties):
            return list(self._properties)[index]
        return ''

    def to_dict(self) -> Dict[str, str]:
        """Return a plain ``{name: value}`` mapping."""
        return {name: property_value.value for name, property_value in self._properties.items()}

    def __len__(self) -> int:
        return len(self._properties)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._properties))

    def __contains__(self, property_name: object) -> bool:
        return isinstance(property_name, str) and property_name.strip().lower() in self._properties

    def __repr__(self) -> str:
        return f"<CSSStyleDeclaration {self.css_text!r}>"

"""
CSS property value parsing.
This package validates CSS property values and expands shorthands into longhands.
"""

from .properties import ParserOptions, PropertyParser, PropertyValue, parse
from .declaration import CSSStyleDeclaration
from .stylesheet import StyleSheetResolver

__all__ = [
    'ParserOptions', 'PropertyParser', 'PropertyValue', 'parse',
    'CSSStyleDeclaration', 'StyleSheetResolver'
]

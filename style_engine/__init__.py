"""
Wink Style Engine - CSS property value parsing and shorthand expansion.
"""

from style_engine.css import (
    CSSStyleDeclaration,
    ParserOptions,
    PropertyParser,
    PropertyValue,
    StyleSheetResolver,
    parse,
)

# Package information
__version__ = "0.1.0"
__author__ = "Wink Browser Team"
__description__ = "CSS property value parsing and shorthand expansion"

__all__ = [
    'CSSStyleDeclaration',
    'ParserOptions',
    'PropertyParser',
    'PropertyValue',
    'StyleSheetResolver',
    'parse',
]

"""
Stylesheet resolution.

Parses stylesheets with cssutils and runs every declaration of every style
rule through the property parser, yielding resolved longhands per selector.
"""

import logging
from typing import Dict, Optional, Union

import cssutils

from .declaration import CSSStyleDeclaration
from .properties import PropertyParser

# Suppress cssutils warning logs, invalid values are reported by our own parser
cssutils.log.setLevel(logging.CRITICAL)

logger = logging.getLogger(__name__)


class StyleSheetResolver:
    """Resolve the style rules of a stylesheet into longhand declarations."""

    def __init__(self, parser: Optional[PropertyParser] = None):
        """
        Initialize the resolver.

        Args:
            parser: Property parser shared by every resolved declaration
        """
        self.parser = parser or PropertyParser()

    def parse(self, css_content: str) -> cssutils.css.CSSStyleSheet:
        """
        Parse CSS content into a stylesheet.

        Args:
            css_content: CSS content to parse

        Returns:
            cssutils.css.CSSStyleSheet: Parsed stylesheet, empty on error
        """
        try:
            return cssutils.parseString(css_content, validate=False)
        except Exception as e:
            logger.error(f"Error parsing CSS: {e}")
            return cssutils.css.CSSStyleSheet()

    def resolve(self, stylesheet: Union[str, cssutils.css.CSSStyleSheet]) -> Dict[str, CSSStyleDeclaration]:
        """
        Resolve every style rule of a stylesheet.

        Rules sharing a selector are merged in source order, later
        declarations overwriting earlier ones.

        Args:
            stylesheet: CSS text or an already parsed stylesheet

        Returns:
            Dict[str, CSSStyleDeclaration]: Declarations by selector
        """
        if isinstance(stylesheet, str):
            stylesheet = self.parse(stylesheet)

        styles: Dict[str, CSSStyleDeclaration] = {}
        for rule in stylesheet.cssRules:
            if rule.type != cssutils.css.CSSRule.STYLE_RULE:
                continue

            declaration = styles.get(rule.selectorText)
            if declaration is None:
                declaration = styles[rule.selectorText] = CSSStyleDeclaration(parser=self.parser)

            for css_property in rule.style.getProperties(all=True):
                accepted = declaration.set_property(
                    css_property.name, css_property.value, css_property.priority)
                if not accepted:
                    logger.debug(
                        f"Dropped '{css_property.name}: {css_property.value}' in '{rule.selectorText}'")

        return styles

    def extract_styles(self, stylesheet: Union[str, cssutils.css.CSSStyleSheet]) -> Dict[str, Dict[str, str]]:
        """
        Extract resolved longhand values organized by selector.

        Args:
            stylesheet: CSS text or an already parsed stylesheet

        Returns:
            Dict[str, Dict[str, str]]: Longhand values by selector
        """
        return {
            selector: declaration.to_dict()
            for selector, declaration in self.resolve(stylesheet).items()
        }

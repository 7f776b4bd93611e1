"""
CSS property value parser.

Maps a property name and a raw value to the longhand properties it sets.
Simple properties produce a single entry; shorthands such as ``border``,
``margin`` or ``background`` are split into positional tokens and expanded
into several longhands at once. A rejected value yields None and must leave
the caller's declarations untouched.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Tuple

from . import values
from .values import GrammarResult, check, component

logger = logging.getLogger(__name__)

SIDES = ('top', 'right', 'bottom', 'left')
CORNERS = ('top-left', 'top-right', 'bottom-right', 'bottom-left')

BORDER_STYLE = frozenset({
    'none', 'hidden', 'dotted', 'dashed', 'solid',
    'double', 'groove', 'ridge', 'inset', 'outset'
})
BORDER_WIDTH = frozenset({'thin', 'medium', 'thick', 'inherit', 'initial', 'unset', 'revert'})
BORDER_COLLAPSE = frozenset({'separate', 'collapse', 'initial', 'inherit'})
BACKGROUND_REPEAT = frozenset({'repeat', 'repeat-x', 'repeat-y', 'no-repeat', 'inherit'})
BACKGROUND_ATTACHMENT = frozenset({'scroll', 'fixed', 'inherit'})
BACKGROUND_POSITION = frozenset({'top', 'center', 'bottom', 'left', 'right'})
FLEX_BASIS = frozenset({
    'auto', 'fill', 'max-content', 'min-content', 'fit-content',
    'content', 'inherit', 'initial', 'revert', 'unset'
})
CLEAR = frozenset({'none', 'left', 'right', 'both', 'inherit'})
FLOAT = frozenset({'none', 'left', 'right', 'inherit'})
FONT_SIZE = frozenset({
    'xx-small', 'x-small', 'small', 'medium', 'large', 'x-large', 'xx-large',
    'xxx-large', 'smaller', 'larger', 'inherit', 'initial', 'revert', 'unset'
})
CLIP_KEYWORDS = frozenset({'auto', 'initial', 'inherit'})

# flex keyword -> (grow, shrink, basis)
FLEX_KEYWORDS = {
    'none': ('0', '0', 'auto'),
    'auto': ('1', '1', 'auto'),
    'initial': ('0', '0', 'auto'),
    'inherit': ('inherit', 'inherit', 'inherit'),
}

BACKGROUND_LONGHANDS = (
    'background-color', 'background-image', 'background-repeat',
    'background-attachment', 'background-position'
)

# Longhands written by each shorthand
SHORTHAND_LONGHANDS: Dict[str, Tuple[str, ...]] = {
    'border': tuple(
        f'border-{side}-{part}' for side in SIDES for part in ('width', 'style', 'color')
    ),
    'border-radius': tuple(f'border-{corner}-radius' for corner in CORNERS),
    'margin': tuple(f'margin-{side}' for side in SIDES),
    'padding': tuple(f'padding-{side}' for side in SIDES),
    'flex': ('flex-grow', 'flex-shrink', 'flex-basis'),
    'background': BACKGROUND_LONGHANDS,
}
for _side in SIDES:
    SHORTHAND_LONGHANDS[f'border-{_side}'] = tuple(
        f'border-{_side}-{part}' for part in ('width', 'style', 'color')
    )

PropertyValueMap = Dict[str, 'PropertyValue']


@dataclass(frozen=True)
class PropertyValue:
    """Canonical value of a longhand plus its ``!important`` flag."""

    value: str
    important: bool = False


@dataclass(frozen=True)
class ParserOptions:
    """
    Behaviour switches for PropertyParser.

    Attributes:
        strict_integers: Only accept plain integers for flex-grow/flex-shrink
            instead of anything starting with a number
        legacy_box_shorthands: Make margin/padding read every side from the
            first token, as older implementations did
    """

    strict_integers: bool = False
    legacy_box_shorthands: bool = False

    @classmethod
    def from_config(cls, config: Any) -> 'ParserOptions':
        """
        Build options from a Config instance.

        Only JSON ``true`` enables an option; strings such as ``"false"`` do not.

        Args:
            config: Object with a dotted-key ``get`` method

        Returns:
            ParserOptions: Options read from the ``parser`` section
        """
        return cls(
            strict_integers=config.get('parser.strict_integers', False) is True,
            legacy_box_shorthands=config.get('parser.legacy_box_shorthands', False) is True,
        )


Grammar = Callable[[str, str, bool, ParserOptions], Optional[PropertyValueMap]]

PROPERTY_PARSERS: Dict[str, Grammar] = {}


def grammar(*property_names: str):
    """Decorator registering a function in ``PROPERTY_PARSERS``."""
    def grammar_decorator(function: Grammar) -> Grammar:
        for property_name in property_names:
            assert property_name not in PROPERTY_PARSERS, property_name
            PROPERTY_PARSERS[property_name] = function
        return function
    return grammar_decorator


def split_tokens(value: str) -> List[str]:
    """Split a value on runs of whitespace."""
    return value.split()


def keyword(value: str, allowed: FrozenSet[str]) -> Optional[str]:
    """Return the lower-cased value if it belongs to ``allowed``."""
    lower_value = value.lower()
    if lower_value in allowed:
        return lower_value
    return None


# Value grammars shared by longhands and shorthands

def border_style_value(value: str) -> Optional[str]:
    return keyword(value, BORDER_STYLE)


def border_width_value(value: str) -> Optional[str]:
    return keyword(value, BORDER_WIDTH) or values.length(value)


def border_collapse_value(value: str) -> Optional[str]:
    return keyword(value, BORDER_COLLAPSE)


def clear_value(value: str) -> Optional[str]:
    return keyword(value, CLEAR)


def float_value(value: str) -> Optional[str]:
    return keyword(value, FLOAT)


def background_repeat_value(value: str) -> Optional[str]:
    return keyword(value, BACKGROUND_REPEAT)


def background_attachment_value(value: str) -> Optional[str]:
    return keyword(value, BACKGROUND_ATTACHMENT)


def font_size_value(value: str) -> Optional[str]:
    return keyword(value, FONT_SIZE) or values.length(value) or values.percentage(value)


def flex_basis_value(value: str) -> Optional[str]:
    return keyword(value, FLEX_BASIS) or values.length(value)


def background_position_value(value: str) -> Optional[str]:
    """
    Validate a one or two token ``background-position``.

    A single length is kept as written; a single keyword is lower-cased.
    Two lengths/percentages keep their original spacing, two keywords are
    joined by one space.
    """
    parts = split_tokens(value)
    if len(parts) == 1:
        if values.length(parts[0]):
            return value
        lower_value = parts[0].lower()
        if lower_value in BACKGROUND_POSITION or lower_value == 'inherit':
            return lower_value
        return None

    if len(parts) != 2:
        return None

    first, second = parts
    if ((values.length(first) or values.percentage(first))
            and (values.length(second) or values.percentage(second))):
        return value.lower()
    if first.lower() in BACKGROUND_POSITION and second.lower() in BACKGROUND_POSITION:
        return f'{first.lower()} {second.lower()}'
    return None


def clip_value(value: str) -> Optional[str]:
    """
    Validate ``clip``.

    Keywords come back lower-cased, while a valid ``rect()`` is returned with
    its original casing.
    """
    lower_value = value.lower()
    if lower_value in CLIP_KEYWORDS:
        return lower_value

    if not (lower_value.startswith('rect(') and lower_value.endswith(')')):
        return None

    parts = [part.strip() for part in lower_value[5:-1].split(',')]
    if len(parts) != 4:
        return None
    for part in parts:
        if not values.measurement(part):
            return None
    return value


def _single(property_name: str, value: Optional[str], important: bool) -> Optional[PropertyValueMap]:
    if value is None:
        return None
    return {property_name: PropertyValue(value, important)}


def _value_grammar(recognizer: Callable[[str], Optional[str]]) -> Grammar:
    """Wrap a value recognizer as a grammar emitting one longhand."""
    def single_value_grammar(name: str, value: str, important: bool,
                             options: ParserOptions) -> Optional[PropertyValueMap]:
        return _single(name, recognizer(value), important)
    return single_value_grammar


SINGLE_VALUE_PROPERTIES: Dict[str, Callable[[str], Optional[str]]] = {
    'border-style': border_style_value,
    'border-collapse': border_collapse_value,
    'background-repeat': background_repeat_value,
    'background-attachment': background_attachment_value,
    'clear': clear_value,
    'float': float_value,
    'border-width': border_width_value,
    'font-size': font_size_value,
    'flex-basis': flex_basis_value,
    'background-position': background_position_value,
    'clip': clip_value,
    'background-color': values.color,
    'background-image': values.url,
    'border-color': values.color,
    'color': values.color,
    'width': values.measurement_or_auto,
    'height': values.measurement_or_auto,
    'top': values.measurement_or_auto,
    'right': values.measurement_or_auto,
    'bottom': values.measurement_or_auto,
    'left': values.measurement_or_auto,
}
for _side in SIDES:
    SINGLE_VALUE_PROPERTIES[f'margin-{_side}'] = values.measurement_or_auto
    SINGLE_VALUE_PROPERTIES[f'padding-{_side}'] = values.measurement
    SINGLE_VALUE_PROPERTIES[f'border-{_side}-width'] = border_width_value
    SINGLE_VALUE_PROPERTIES[f'border-{_side}-style'] = border_style_value
    SINGLE_VALUE_PROPERTIES[f'border-{_side}-color'] = values.color
for _corner in CORNERS:
    SINGLE_VALUE_PROPERTIES[f'border-{_corner}-radius'] = values.measurement

for _name, _recognizer in SINGLE_VALUE_PROPERTIES.items():
    grammar(_name)(_value_grammar(_recognizer))


@grammar('flex-grow', 'flex-shrink')
def flex_factor(name: str, value: str, important: bool,
                options: ParserOptions) -> Optional[PropertyValueMap]:
    return _single(name, values.integer(value, strict=options.strict_integers), important)


@grammar('border')
def border(name: str, value: str, important: bool,
           options: ParserOptions) -> Optional[PropertyValueMap]:
    """
    Expand ``border: <width> [<style> [<color>]]`` to all four sides.

    The width is required; style and color may be left out but are
    rejected when given and invalid.
    """
    tokens = split_tokens(value)
    if len(tokens) > 3:
        return None

    width = component(tokens, 0, border_width_value)
    style = component(tokens, 1, border_style_value)
    color = component(tokens, 2, values.color)

    if not width.is_accepted or style.is_rejected or color.is_rejected:
        return None

    properties: PropertyValueMap = {}
    for side in SIDES:
        properties[f'border-{side}-width'] = PropertyValue(width.value, important)
        if style.is_accepted:
            properties[f'border-{side}-style'] = PropertyValue(style.value, important)
        if color.is_accepted:
            properties[f'border-{side}-color'] = PropertyValue(color.value, important)
    return properties


@grammar('border-top', 'border-right', 'border-bottom', 'border-left')
def border_side(name: str, value: str, important: bool,
                options: ParserOptions) -> Optional[PropertyValueMap]:
    """Expand ``border-<side>: <width> <style> <color>``; all three are required."""
    tokens = split_tokens(value)
    if len(tokens) != 3:
        return None

    width = border_width_value(tokens[0])
    style = border_style_value(tokens[1])
    color = values.color(tokens[2])
    if not (width and style and color):
        return None

    return {
        f'{name}-width': PropertyValue(width, important),
        f'{name}-style': PropertyValue(style, important),
        f'{name}-color': PropertyValue(color, important),
    }


@grammar('border-radius')
def border_radius(name: str, value: str, important: bool,
                  options: ParserOptions) -> Optional[PropertyValueMap]:
    """Expand up to four corner radii, clockwise from the top left."""
    tokens = split_tokens(value)
    if len(tokens) > len(CORNERS):
        return None

    corners = [component(tokens, index, values.measurement) for index in range(len(CORNERS))]
    if not corners[0].is_accepted or any(corner.is_rejected for corner in corners):
        return None

    return {
        f'border-{corner}-radius': PropertyValue(result.value, important)
        for corner, result in zip(CORNERS, corners)
        if result.is_accepted
    }


def _box_sides(prefix: str, value: str, important: bool, options: ParserOptions,
               recognizer: Callable[[str], Optional[str]]) -> Optional[PropertyValueMap]:
    tokens = split_tokens(value)
    if not tokens or len(tokens) > len(SIDES):
        return None

    sides = []
    for index in range(len(SIDES)):
        if index >= len(tokens):
            sides.append(GrammarResult.absent())
        elif options.legacy_box_shorthands:
            sides.append(check(tokens[0], recognizer))
        else:
            sides.append(check(tokens[index], recognizer))

    if not sides[0].is_accepted or any(side.is_rejected for side in sides):
        return None

    return {
        f'{prefix}-{side}': PropertyValue(result.value, important)
        for side, result in zip(SIDES, sides)
        if result.is_accepted
    }


@grammar('padding')
def padding(name: str, value: str, important: bool,
            options: ParserOptions) -> Optional[PropertyValueMap]:
    return _box_sides('padding', value, important, options, values.measurement)


@grammar('margin')
def margin(name: str, value: str, important: bool,
           options: ParserOptions) -> Optional[PropertyValueMap]:
    return _box_sides('margin', value, important, options, values.measurement_or_auto)


@grammar('flex')
def flex(name: str, value: str, important: bool,
         options: ParserOptions) -> Optional[PropertyValueMap]:
    """Expand ``flex`` from a keyword or from ``<grow> <shrink> <basis>``."""
    lower_value = value.lower()
    if lower_value in FLEX_KEYWORDS:
        grow, shrink, basis = FLEX_KEYWORDS[lower_value]
    else:
        tokens = split_tokens(value)
        if len(tokens) != 3:
            return None
        grow = values.integer(tokens[0], strict=options.strict_integers)
        shrink = values.integer(tokens[1], strict=options.strict_integers)
        basis = flex_basis_value(tokens[2])
        if not (grow and shrink and basis):
            return None

    return {
        'flex-grow': PropertyValue(grow, important),
        'flex-shrink': PropertyValue(shrink, important),
        'flex-basis': PropertyValue(basis, important),
    }


@grammar('background')
def background(name: str, value: str, important: bool,
               options: ParserOptions) -> Optional[PropertyValueMap]:
    """
    Expand ``background: [<color>] <image> <repeat> <attachment> <position>``.

    When the first token is not a color the color slot is empty and the
    remaining tokens move one position to the right. The position slot takes
    every token left over. Only longhands whose token was present and valid
    are emitted.
    """
    tokens = split_tokens(value)
    if not tokens:
        return None

    if values.color(tokens[0]) is None:
        tokens.insert(0, '')

    results = (
        component(tokens, 0, values.color),
        component(tokens, 1, values.url),
        component(tokens, 2, background_repeat_value),
        component(tokens, 3, background_attachment_value),
        check(' '.join(tokens[4:]), background_position_value),
    )
    color, image = results[0], results[1]

    if not (color.is_accepted or image.is_accepted):
        return None
    if any(result.is_rejected for result in results[2:]):
        return None

    return {
        longhand: PropertyValue(result.value, important)
        for longhand, result in zip(BACKGROUND_LONGHANDS, results)
        if result.is_accepted
    }


class PropertyParser:
    """
    Parser turning ``property: value`` pairs into longhand declarations.

    Instances only hold immutable options and can be shared freely.
    """

    def __init__(self, options: Optional[ParserOptions] = None):
        """
        Initialize the property parser.

        Args:
            options: Behaviour switches, defaults to ParserOptions()
        """
        self.options = options or ParserOptions()

    @staticmethod
    def is_supported(property_name: str) -> bool:
        """Whether the property has a registered grammar."""
        return property_name.strip().lower() in PROPERTY_PARSERS

    @staticmethod
    def is_shorthand(property_name: str) -> bool:
        return property_name.strip().lower() in SHORTHAND_LONGHANDS

    @staticmethod
    def longhands(property_name: str) -> Tuple[str, ...]:
        """Longhands written by a shorthand, or an empty tuple."""
        return SHORTHAND_LONGHANDS.get(property_name.strip().lower(), ())

    def parse(self, property_name: str, value: str,
              important: bool = False) -> Optional[PropertyValueMap]:
        """
        Parse a property value.

        Args:
            property_name: CSS property name, case-insensitive
            value: Raw property value
            important: Whether the declaration is ``!important``

        Returns:
            Mapping of longhand names to PropertyValue, or None if the value
            was rejected
        """
        name = property_name.strip().lower()
        value = value.strip()
        if not name or not value:
            return None

        parser = PROPERTY_PARSERS.get(name)
        if parser is None:
            logger.debug(f"No grammar for '{name}', keeping value as written")
            return {name: PropertyValue(value, important)}

        properties = parser(name, value, important, self.options)
        if properties is None:
            logger.debug(f"Rejected value {value!r} for property '{name}'")
        return properties


_default_parser = PropertyParser()


def parse(property_name: str, value: str,
          important: bool = False) -> Optional[PropertyValueMap]:
    """Parse a property value with the default options."""
    return _default_parser.parse(property_name, value, important)

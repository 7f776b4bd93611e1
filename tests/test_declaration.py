"""Tests for the style declaration store."""

import pytest

from style_engine.css.declaration import CSSStyleDeclaration, parse_declaration_block
from style_engine.css.properties import ParserOptions, PropertyParser


class TestParseDeclarationBlock:
    def test_declarations_in_order(self):
        assert parse_declaration_block('a: b; c: d !important') == [
            ('a', 'b', False),
            ('c', 'd', True),
        ]

    def test_names_are_lower_cased(self):
        assert parse_declaration_block('FLOAT: Left') == [('float', 'Left', False)]

    def test_invalid_declaration_skipped(self):
        assert parse_declaration_block('garbage; clear: both') == [('clear', 'both', False)]

    def test_empty(self):
        assert parse_declaration_block('') == []

    def test_multi_token_value(self):
        assert parse_declaration_block('border: 1px solid #000') == [
            ('border', '1px solid #000', False)]


class TestCSSStyleDeclaration:
    def test_initial_css_text(self):
        style = CSSStyleDeclaration('margin: 1px 2px; float: LEFT !important')
        assert style.get_property_value('margin-top') == '1px'
        assert style.get_property_value('margin-right') == '2px'
        assert style.get_property_value('float') == 'left'
        assert style.get_property_priority('float') == 'important'
        assert style.get_property_priority('margin-top') == ''
        assert len(style) == 3

    def test_rejected_value_leaves_state_untouched(self):
        style = CSSStyleDeclaration()
        assert style.set_property('float', 'left')
        assert not style.set_property('float', 'sideways')
        assert style.get_property_value('float') == 'left'

    def test_rejected_shorthand_writes_nothing(self):
        style = CSSStyleDeclaration('border-top-width: 3px')
        assert not style.set_property('border', 'bogus solid #000')
        assert style.to_dict() == {'border-top-width': '3px'}

    def test_shorthand_overwrites_longhands(self):
        style = CSSStyleDeclaration()
        style.set_property('margin-top', '5px', 'important')
        style.set_property('margin', '1px')
        assert style.get_property_value('margin-top') == '1px'
        assert style.get_property_priority('margin-top') == ''

    def test_background_partial_emission(self):
        style = CSSStyleDeclaration('background-repeat: repeat-y')
        style.set_property('background', '#000 bogus')
        assert style.to_dict() == {
            'background-repeat': 'repeat-y',
            'background-color': '#000',
        }

    def test_shorthand_value_is_not_stored(self):
        style = CSSStyleDeclaration('flex: none')
        assert 'flex' not in style
        assert style.get_property_value('flex') == ''
        assert style.get_property_value('flex-basis') == 'auto'

    def test_remove_shorthand_removes_longhands(self):
        style = CSSStyleDeclaration('margin: 1px 2px 3px 4px; float: left')
        assert style.remove_property('margin') == ''
        assert style.to_dict() == {'float': 'left'}

    def test_remove_longhand_returns_old_value(self):
        style = CSSStyleDeclaration('float: left')
        assert style.remove_property('FLOAT') == 'left'
        assert style.remove_property('float') == ''
        assert len(style) == 0

    def test_empty_value_removes_property(self):
        style = CSSStyleDeclaration('float: left')
        assert style.set_property('float', '')
        assert 'float' not in style

    def test_empty_name_raises(self):
        with pytest.raises(ValueError):
            CSSStyleDeclaration().set_property('  ', 'left')

    def test_css_text_serialization(self):
        style = CSSStyleDeclaration('float: left; clear: both !important')
        assert style.css_text == 'float: left; clear: both !important;'

    def test_css_text_setter_replaces_everything(self):
        style = CSSStyleDeclaration('float: left')
        style.css_text = 'clear: none'
        assert style.to_dict() == {'clear': 'none'}

    def test_item_and_iteration(self):
        style = CSSStyleDeclaration('border-radius: 1px 2px')
        assert list(style) == ['border-top-left-radius', 'border-top-right-radius']
        assert style.item(1) == 'border-top-right-radius'
        assert style.item(2) == ''
        assert style.item(-1) == ''

    def test_unknown_property_kept(self):
        style = CSSStyleDeclaration('display: block')
        assert style.get_property_value('display') == 'block'

    def test_custom_parser(self):
        parser = PropertyParser(ParserOptions(legacy_box_shorthands=True))
        style = CSSStyleDeclaration('padding: 1px 2px', parser=parser)
        assert style.parser is parser
        assert style.get_property_value('padding-right') == '1px'

    def test_repr(self):
        assert repr(CSSStyleDeclaration('clear: both')) == "<CSSStyleDeclaration 'clear: both;'>"

"""
Tests for wall analysis parsing
"""

import json

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from generation.response_parser import (
    DEFAULT_WALL_BOUNDS,
    WallEstimate,
    extract_json_object,
    parse_wall_analysis,
)
from utils.coordinates import WallBounds


def analysis(**overrides):
    data = {
        "wallBounds": {"x": 10, "y": 12, "width": 75, "height": 60},
        "wallWidthFt": 14,
        "wallHeightFt": 8.5,
    }
    data.update(overrides)
    return json.dumps(data)


class TestExtractJsonObject:
    def test_plain_object(self):
        assert extract_json_object('{"a": 1}') == '{"a": 1}'

    def test_surrounding_prose(self):
        text = 'Here is the analysis: {"a": {"b": 2}} Hope this helps {x}'
        assert extract_json_object(text) == '{"a": {"b": 2}}'

    def test_braces_inside_strings(self):
        text = '{"note": "use } carefully", "a": 1}'
        assert extract_json_object(text) == text

    def test_escaped_quote_inside_string(self):
        text = '{"note": "say \\"}\\" now", "a": 1}'
        assert extract_json_object(text) == text

    def test_no_object(self):
        assert extract_json_object("no json here") is None

    def test_unbalanced(self):
        assert extract_json_object('{"a": {"b": 1}') is None


class TestParseWallAnalysis:
    def test_valid_response(self):
        estimate = parse_wall_analysis(analysis())
        assert estimate == WallEstimate(
            bounds=WallBounds(x=10, y=12, width=75, height=60),
            width_ft=14,
            height_ft=8.5,
        )

    def test_not_json_returns_defaults(self):
        estimate = parse_wall_analysis("not json")
        assert estimate == WallEstimate.default()
        assert estimate.bounds == WallBounds(x=15, y=15, width=70, height=70)
        assert (estimate.width_ft, estimate.height_ft) == (12, 8)

    def test_empty_and_none_return_defaults(self):
        assert parse_wall_analysis("") == WallEstimate.default()
        assert parse_wall_analysis(None) == WallEstimate.default()

    def test_markdown_fenced_json(self):
        text = f"```json\n{analysis()}\n```"
        assert parse_wall_analysis(text).width_ft == 14

    def test_malformed_json_returns_defaults(self):
        assert parse_wall_analysis('{"wallWidthFt": 14,}') == WallEstimate.default()

    def test_truncated_json_returns_defaults(self):
        assert parse_wall_analysis('{"wallWidthFt": 14, "wallBounds": {') == WallEstimate.default()

    def test_wall_size_clamped(self):
        estimate = parse_wall_analysis(analysis(wallWidthFt=999, wallHeightFt=1))
        assert estimate.width_ft == 30
        assert estimate.height_ft == 6

    def test_bounds_clamped(self):
        text = analysis(wallBounds={"x": -10, "y": 150, "width": 5, "height": 400})
        assert parse_wall_analysis(text).bounds == WallBounds(x=0, y=100, width=20, height=100)

    def test_missing_fields_use_defaults(self):
        estimate = parse_wall_analysis('{"wallWidthFt": 20}')
        assert estimate.width_ft == 20
        assert estimate.height_ft == 8
        assert estimate.bounds == DEFAULT_WALL_BOUNDS

    def test_partial_bounds(self):
        estimate = parse_wall_analysis('{"wallBounds": {"x": 5, "width": 90}}')
        assert estimate.bounds == WallBounds(x=5, y=15, width=90, height=70)

    def test_wrong_types_use_defaults(self):
        text = analysis(wallWidthFt="wide", wallHeightFt=True)
        estimate = parse_wall_analysis(text)
        assert estimate.width_ft == 12
        assert estimate.height_ft == 8

    def test_null_uses_default(self):
        assert parse_wall_analysis(analysis(wallWidthFt=None)).width_ft == 12

    def test_numeric_strings_accepted(self):
        estimate = parse_wall_analysis(analysis(wallWidthFt="16", wallHeightFt=" 9.5 "))
        assert estimate.width_ft == 16
        assert estimate.height_ft == 9.5

    def test_non_finite_rejected(self):
        assert parse_wall_analysis(analysis(wallWidthFt="nan")).width_ft == 12
        assert parse_wall_analysis(analysis(wallWidthFt="inf")).width_ft == 12

    def test_integer_too_large_for_float(self):
        text = '{"wallWidthFt": 1' + '0' * 400 + ', "wallHeightFt": 9}'
        estimate = parse_wall_analysis(text)
        assert estimate.width_ft == 12
        assert estimate.height_ft == 9

    def test_integer_over_digit_limit(self):
        text = '{"wallWidthFt": 1' + '0' * 5000 + '}'
        assert parse_wall_analysis(text) == WallEstimate.default()

    def test_deeply_nested_json(self):
        text = '{"wallBounds": ' + '[' * 100000 + ']' * 100000 + '}'
        assert parse_wall_analysis(text) == WallEstimate.default()

    def test_bounds_not_object(self):
        estimate = parse_wall_analysis(analysis(wallBounds=[10, 10, 50, 50]))
        assert estimate.bounds == DEFAULT_WALL_BOUNDS
        assert estimate.width_ft == 14

    def test_top_level_array_returns_defaults(self):
        assert parse_wall_analysis("[1, 2, 3]") == WallEstimate.default()

    def test_always_within_ranges(self):
        for text in [analysis(), "junk", analysis(wallWidthFt=-5), analysis(wallBounds={"x": 1e9})]:
            estimate = parse_wall_analysis(text)
            assert 5 <= estimate.width_ft <= 30
            assert 6 <= estimate.height_ft <= 15
            assert 0 <= estimate.bounds.x <= 100
            assert 0 <= estimate.bounds.y <= 100
            assert 20 <= estimate.bounds.width <= 100
            assert 20 <= estimate.bounds.height <= 100


if __name__ == '__main__':
    pytest.main([__file__, '-v'])

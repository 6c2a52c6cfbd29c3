"""
日志级别单元测试

覆盖级别排序、取模归一化、名称解析以及级别门控。
"""

from __future__ import annotations

import itertools

import pytest

from rotalog.errors import InvalidLevelError
from rotalog.levels import Level, enabled, normalize_level, parse_level


class TestLevelOrdering:
    """级别排序测试"""

    def test_most_severe_has_lowest_value(self) -> None:
        """越严重的级别数值越小"""
        assert list(Level) == [Level.PANIC, Level.FATAL, Level.ERROR, Level.WARN, Level.INFO, Level.DEBUG]
        assert [int(level) for level in Level] == [0, 1, 2, 3, 4, 5]

    def test_labels_are_lowercase(self) -> None:
        """渲染名称为小写，WARN 渲染为 warning"""
        assert Level.INFO.label == "info"
        assert Level.WARN.label == "warning"
        assert str(Level.PANIC) == "panic"


class TestNormalizeLevel:
    """取模归一化测试"""

    def test_six_wraps_to_most_severe(self) -> None:
        """6 个级别时原始值 6 应归一化为 0"""
        assert normalize_level(6) is Level.PANIC

    def test_in_range_values_are_unchanged(self) -> None:
        for level in Level:
            assert normalize_level(int(level)) is level

    @pytest.mark.parametrize(("raw", "expected"), [(7, Level.FATAL), (11, Level.DEBUG), (-1, Level.DEBUG), (12, Level.PANIC)])
    def test_out_of_range_values_wrap(self, raw: int, expected: Level) -> None:
        """越界值取模而不是报错"""
        assert normalize_level(raw) is expected


class TestParseLevel:
    """级别解析测试"""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("panic", Level.PANIC),
            ("FATAL", Level.FATAL),
            ("Error", Level.ERROR),
            ("warn", Level.WARN),
            ("warning", Level.WARN),
            (" info ", Level.INFO),
            ("debug", Level.DEBUG),
        ],
    )
    def test_names_are_case_insensitive(self, name: str, expected: Level) -> None:
        assert parse_level(name) is expected

    def test_integers_are_wrapped(self) -> None:
        assert parse_level(6) is Level.PANIC

    def test_level_passes_through(self) -> None:
        assert parse_level(Level.ERROR) is Level.ERROR

    def test_unknown_name_raises(self) -> None:
        """未知名称应抛出 InvalidLevelError（同时是 ValueError）"""
        with pytest.raises(InvalidLevelError) as exc_info:
            parse_level("verbose")
        assert isinstance(exc_info.value, ValueError)
        assert exc_info.value.code == "INVALID_LEVEL"


class TestEnabled:
    """级别门控测试"""

    @pytest.mark.parametrize(("threshold", "level"), list(itertools.product(Level, Level)))
    def test_enabled_iff_threshold_at_least_level(self, threshold: Level, level: Level) -> None:
        assert enabled(threshold, level) is (int(threshold) >= int(level))

    def test_info_threshold_admits_warn_but_not_debug(self) -> None:
        assert enabled(Level.INFO, Level.WARN)
        assert enabled(Level.INFO, Level.INFO)
        assert not enabled(Level.INFO, Level.DEBUG)

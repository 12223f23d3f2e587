"""Traditional-character names for Chinese calendar quantities."""

from __future__ import annotations

from .month import Month

_DIGITS = "十一二三四五六七八九"

_STEMS = "癸甲乙丙丁戊己庚辛壬"
_BRANCHES = "亥子丑寅卯辰巳午未申酉戌"

# index = term % 24
_SOLAR_TERMS = (
    "大寒", "立春", "雨水", "驚蟄", "春分", "清明", "穀雨", "立夏",
    "小滿", "芒種", "夏至", "小暑", "大暑", "立秋", "處暑", "白露",
    "秋分", "寒露", "霜降", "立冬", "小雪", "大雪", "冬至", "小寒",
)


def _check(name: str, value: int, hi: int) -> None:
    if not (1 <= value <= hi):
        raise ValueError(f"{name} {value} not in 1..={hi}")


def sexagenary(num: int) -> str:
    """1 -> 甲子, 60 -> 癸亥."""
    _check("sexagenary number", num, 60)
    return _STEMS[num % 10] + _BRANCHES[num % 12]


def month(m: Month) -> str:
    """Common(1) -> 正月, Common(11) -> 冬月, Common(12) -> 臘月, Leap(n) -> 閏..."""
    _check("month", m.num, 12)
    if m.num == 1:
        name = "正月"
    elif m.num == 11:
        name = "冬月"
    elif m.num == 12:
        name = "臘月"
    else:
        name = _DIGITS[m.num % 10] + "月"
    return "閏" + name if m.is_leap else name


def day(d: int) -> str:
    """Day of a lunar month: 初一 .. 初十, 十一 .. 二十, 廿一 .. 三十."""
    _check("day", d, 30)
    if d <= 10:
        return "初" + _DIGITS[d % 10]
    if d < 20:
        return "十" + _DIGITS[d % 10]
    if d == 20:
        return "二十"
    if d < 30:
        return "廿" + _DIGITS[d % 10]
    return "三十"


def solar_term(term: int) -> str:
    """1 -> 立春 .. 24 -> 大寒."""
    _check("solar term", term, 24)
    return _SOLAR_TERMS[term % 24]

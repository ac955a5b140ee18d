"""RFC 3339 时间戳校验工具模块。"""

import re
from datetime import datetime

_RFC3339_PATTERN = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(\.\d+)?([Zz]|[+-]\d{2}:\d{2})",
    re.ASCII,
)


def is_rfc3339(value: object) -> bool:
    """判断取值是否为合法的 RFC 3339 date-time 字符串。

    接受闰秒（秒数为 60），日期部分按日历校验（如 2 月 30 日非法）。

    Args:
        value: 待校验的取值。

    Returns:
        合法时返回 True。
    """
    if not isinstance(value, str):
        return False
    match = _RFC3339_PATTERN.fullmatch(value)
    if match is None:
        return False

    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    offset = match.group(8)
    if offset.upper() != "Z":
        offset_hour, offset_minute = int(offset[1:3]), int(offset[4:6])
        if offset_hour > 23 or offset_minute > 59:
            return False

    # leap second
    if second == 60:
        second = 59
    try:
        datetime(year, month, day, hour, minute, second)
    except ValueError:
        return False
    return True

from __future__ import annotations

from enum import Enum


class FileSuffix(Enum):
    """
    支持生成的输出文件类型，枚举值即文件后缀。
    """
    MD = "md"


def parse_suffix(raw: str | None) -> FileSuffix | None:
    """
    将配置中的文件后缀转换为 FileSuffix。

    忽略首尾空白、大小写以及开头的 '.'。

    Returns:
        FileSuffix | None: 不支持的后缀返回 None。
    """
    if not raw:
        return None
    value = raw.strip().lstrip(".").lower()
    for suffix in FileSuffix:
        if suffix.value == value:
            return suffix
    return None

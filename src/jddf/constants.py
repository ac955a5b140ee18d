"""全局常量定义模块。

本模块定义了 JDDF 项目中使用的所有全局常量，包括：
- 类型名称与整数类型取值范围
- 日志级别与配置文件默认值
"""

TYPES: tuple[str, ...] = (
    "boolean",
    "int8",
    "uint8",
    "int16",
    "uint16",
    "int32",
    "uint32",
    "float32",
    "float64",
    "string",
    "timestamp",
)

INTEGER_RANGES: dict[str, tuple[int, int]] = {
    "int8": (-128, 127),
    "uint8": (0, 255),
    "int16": (-32768, 32767),
    "uint16": (0, 65535),
    "int32": (-2147483648, 2147483647),
    "uint32": (0, 4294967295),
}

FLOAT_TYPES = frozenset({"float32", "float64"})

DEFAULT_LOG_LEVEL = "INFO"
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
CONFIG_FILE_NAME = "jddf.yaml"

"""JDDF - JSON 数据定义格式（JSON Data Definition Format）的 Python 实现。

本模块提供 JDDF 的核心功能，包括：
- Schema 反序列化与语义校验
- 实例校验（返回完整的错误列表）
- 命令行工具
"""

from importlib.metadata import version

from jddf.exceptions import (
    ConfigurationError,
    DeserializationError,
    InstanceTooDeepError,
    InvalidSchemaError,
    JDDFError,
    MaxDepthExceededError,
)
from jddf.schema import Discriminator, Form, Schema
from jddf.validator import ValidationError, Validator, validate

__version__ = version("jddf")

__all__ = [
    "ConfigurationError",
    "DeserializationError",
    "Discriminator",
    "Form",
    "InstanceTooDeepError",
    "InvalidSchemaError",
    "JDDFError",
    "MaxDepthExceededError",
    "Schema",
    "ValidationError",
    "Validator",
    "validate",
]

"""异常定义模块。

本模块定义了 JDDF 项目中使用的所有自定义异常类，
采用层级化设计便于异常捕获和处理。

注意：实例校验产生的 ``jddf.validator.ValidationError`` 是校验结果而不是异常，
不在本模块中定义。
"""


class JDDFError(Exception):
    """JDDF 基础异常类。

    所有 JDDF 自定义异常的基类，可用于统一捕获所有项目异常。
    """

    pass


class DeserializationError(JDDFError):
    """Schema 反序列化异常。

    当 Schema JSON 中某个已知关键字的取值形状不正确时抛出，
    如类型错误、空 enum、enum 重复值等。
    """

    def __init__(self, keyword: str | None, message: str):
        self.keyword = keyword
        prefix = f"{keyword}: " if keyword else ""
        super().__init__(f"{prefix}{message}")


class InvalidSchemaError(JDDFError):
    """Schema 语义校验异常。

    当 ``Schema.verify`` 发现违反语义规则时抛出（快速失败，仅报告第一个违规）。

    Attributes:
        path: 违规位置的 Schema 路径片段。
        reason: 违规原因。
    """

    def __init__(self, path: list[str], reason: str):
        self.path = list(path)
        self.reason = reason
        location = "/" + "/".join(self.path) if self.path else "(root)"
        super().__init__(f"invalid schema at {location}: {reason}")


class MaxDepthExceededError(JDDFError):
    """引用深度超限异常。

    当 ref 跳转次数达到 ``max_depth`` 时抛出，本次校验调用整体失败。
    """

    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"max depth of {max_depth} ref hops exceeded")


class InstanceTooDeepError(JDDFError):
    """实例嵌套过深异常。

    当实例或 Schema 嵌套过深导致解释器递归栈耗尽时抛出。
    """

    pass


class ConfigurationError(JDDFError):
    """配置相关异常。

    当配置文件无法读取、格式错误或验证失败时抛出。
    """

    pass

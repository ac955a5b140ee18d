"""JDDF 实例校验模块。

本模块实现按 Schema 校验任意已解析 JSON 值的功能，包括：
- ValidationError: 单条校验错误（实例路径 + Schema 路径）
- Validator: 带 max_depth / max_errors 上限的校验器
- validate: 便捷函数

校验采用递归下降，同时维护实例路径栈和 Schema 路径帧栈。每次 ref 跳转压入
一个以 ``["definitions", name]`` 开头的新帧，错误只报告当前帧的 Schema 路径。
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from jddf.config import ValidatorConfig
from jddf.constants import FLOAT_TYPES, INTEGER_RANGES
from jddf.exceptions import InstanceTooDeepError, MaxDepthExceededError
from jddf.logger import logger
from jddf.schema import Form, Schema
from jddf.utils.timestamp import is_rfc3339


def _to_pointer(tokens: list[str]) -> str:
    return "".join("/" + token.replace("~", "~0").replace("/", "~1") for token in tokens)


class ValidationError(BaseModel):
    """单条校验错误。

    Attributes:
        instance_path: 实例中出错位置的路径片段。
        schema_path: Schema 中拒绝该实例的位置的路径片段。
    """

    instance_path: list[str] = Field(default_factory=list, alias="instancePath")
    schema_path: list[str] = Field(default_factory=list, alias="schemaPath")
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def instance_pointer(self) -> str:
        """实例路径的 JSON Pointer 表示。"""
        return _to_pointer(self.instance_path)

    @property
    def schema_pointer(self) -> str:
        """Schema 路径的 JSON Pointer 表示。"""
        return _to_pointer(self.schema_path)

    def to_json(self) -> dict[str, list[str]]:
        """转换为跨实现通用的 ``{"instancePath": [...], "schemaPath": [...]}`` 形式。"""
        return self.model_dump(by_alias=True)


def _is_number(instance: Any) -> bool:
    return isinstance(instance, (int, float)) and not isinstance(instance, bool)


class _VM:
    """单次校验调用的临时状态。"""

    def __init__(self, root: Schema, max_depth: int | None, max_errors: int | None):
        self.root = root
        self.max_depth = max_depth
        self.max_errors = max_errors
        self.instance_tokens: list[str] = []
        self.schema_tokens: list[list[str]] = [[]]
        self.errors: list[ValidationError] = []
        self.stopped = False

    def validate(self, schema: Schema, instance: Any, parent_tag: str | None = None) -> None:
        form = schema.form()
        if form is Form.REF:
            self._validate_ref(schema, instance)
        elif form is Form.TYPE:
            self._push_schema_token("type")
            self._validate_type(schema.type, instance)
            self._pop_schema_token()
        elif form is Form.ENUM:
            self._push_schema_token("enum")
            if not isinstance(instance, str) or instance not in schema.enum:
                self._push_error()
            self._pop_schema_token()
        elif form is Form.ELEMENTS:
            self._validate_elements(schema, instance)
        elif form is Form.PROPERTIES:
            self._validate_properties(schema, instance, parent_tag)
        elif form is Form.VALUES:
            self._validate_values(schema, instance)
        elif form is Form.DISCRIMINATOR:
            self._validate_discriminator(schema, instance)

    def _validate_ref(self, schema: Schema, instance: Any) -> None:
        # 帧数含根帧，跳转前帧数已达 max_depth 即超限
        if self.max_depth is not None and len(self.schema_tokens) >= self.max_depth:
            raise MaxDepthExceededError(self.max_depth)
        self.schema_tokens.append(["definitions", schema.ref])
        self.validate(self.root.definitions[schema.ref], instance)
        self.schema_tokens.pop()

    def _validate_type(self, type_name: str, instance: Any) -> None:
        if type_name == "boolean":
            ok = isinstance(instance, bool)
        elif type_name in FLOAT_TYPES:
            ok = _is_number(instance)
        elif type_name in INTEGER_RANGES:
            low, high = INTEGER_RANGES[type_name]
            ok = (
                _is_number(instance)
                and (isinstance(instance, int) or instance.is_integer())
                and low <= instance <= high
            )
        elif type_name == "string":
            ok = isinstance(instance, str)
        else:
            ok = is_rfc3339(instance)
        if not ok:
            self._push_error()

    def _validate_elements(self, schema: Schema, instance: Any) -> None:
        self._push_schema_token("elements")
        if isinstance(instance, (list, tuple)):
            for index, sub_instance in enumerate(instance):
                self._push_instance_token(str(index))
                self.validate(schema.elements, sub_instance)
                if self.stopped:
                    return
                self._pop_instance_token()
        else:
            self._push_error()
        self._pop_schema_token()

    def _validate_properties(self, schema: Schema, instance: Any, parent_tag: str | None) -> None:
        if not isinstance(instance, Mapping):
            self._push_schema_token(
                "properties" if schema.properties is not None else "optionalProperties"
            )
            self._push_error()
            self._pop_schema_token()
            return

        required = schema.properties or {}
        optional = schema.optional_properties or {}

        if schema.properties is not None:
            self._push_schema_token("properties")
            for key, sub_schema in required.items():
                self._push_schema_token(key)
                if key in instance:
                    self._push_instance_token(key)
                    self.validate(sub_schema, instance[key])
                    self._pop_instance_token()
                else:
                    self._push_error()
                if self.stopped:
                    return
                self._pop_schema_token()
            self._pop_schema_token()

        if schema.optional_properties is not None:
            self._push_schema_token("optionalProperties")
            for key, sub_schema in optional.items():
                if key not in instance:
                    continue
                self._push_schema_token(key)
                self._push_instance_token(key)
                self.validate(sub_schema, instance[key])
                if self.stopped:
                    return
                self._pop_instance_token()
                self._pop_schema_token()
            self._pop_schema_token()

        if not schema.additional_properties:
            for key in instance:
                if key in required or key in optional or key == parent_tag:
                    continue
                self._push_instance_token(key)
                self._push_error()
                if self.stopped:
                    return
                self._pop_instance_token()

    def _validate_values(self, schema: Schema, instance: Any) -> None:
        self._push_schema_token("values")
        if isinstance(instance, Mapping):
            for key, sub_instance in instance.items():
                self._push_instance_token(key)
                self.validate(schema.values, sub_instance)
                if self.stopped:
                    return
                self._pop_instance_token()
        else:
            self._push_error()
        self._pop_schema_token()

    def _validate_discriminator(self, schema: Schema, instance: Any) -> None:
        discriminator = schema.discriminator
        tag = discriminator.tag
        self._push_schema_token("discriminator")

        if not isinstance(instance, Mapping):
            self._push_error()
        elif tag not in instance:
            self._push_schema_token("tag")
            self._push_error()
            self._pop_schema_token()
        elif not isinstance(instance[tag], str):
            self._push_instance_token(tag)
            self._push_schema_token("tag")
            self._push_error()
            self._pop_schema_token()
            self._pop_instance_token()
        else:
            tag_value = instance[tag]
            self._push_schema_token("mapping")
            if tag_value in discriminator.mapping:
                self._push_schema_token(tag_value)
                self.validate(discriminator.mapping[tag_value], instance, tag)
                self._pop_schema_token()
            else:
                self._push_instance_token(tag)
                self._push_error()
                self._pop_instance_token()
            self._pop_schema_token()

        self._pop_schema_token()

    def _push_instance_token(self, token: str) -> None:
        self.instance_tokens.append(token)

    def _pop_instance_token(self) -> None:
        self.instance_tokens.pop()

    def _push_schema_token(self, token: str) -> None:
        self.schema_tokens[-1].append(token)

    def _pop_schema_token(self) -> None:
        self.schema_tokens[-1].pop()

    def _push_error(self) -> None:
        self.errors.append(
            ValidationError(
                instance_path=list(self.instance_tokens),
                schema_path=list(self.schema_tokens[-1]),
            )
        )
        if self.max_errors is not None and len(self.errors) >= self.max_errors:
            self.stopped = True


class Validator:
    """JDDF 校验器。

    校验器本身只保存上限配置，每次调用 :meth:`validate` 都会创建独立的临时状态，
    因此同一个校验器和同一个 Schema 可以被多个线程同时使用。

    Attributes:
        max_depth: Schema 路径帧数上限（含根帧），None 表示不限制。对含循环引用的
            Schema 必须设置，否则校验可能无法终止。
        max_errors: 最多收集的错误数量，达到后立即停止，None 表示不限制。
    """

    def __init__(self, max_depth: int | None = None, max_errors: int | None = None):
        """初始化校验器。

        Args:
            max_depth: Schema 路径帧数上限，至多允许 max_depth - 1 次 ref 跳转。
            max_errors: 最大错误数量。

        Raises:
            ValueError: 上限不是正整数时抛出。
        """
        limits = ValidatorConfig(max_depth=max_depth, max_errors=max_errors)
        self.max_depth = limits.max_depth
        self.max_errors = limits.max_errors

    @classmethod
    def from_config(cls, config: ValidatorConfig) -> "Validator":
        """根据配置创建校验器。"""
        return cls(max_depth=config.max_depth, max_errors=config.max_errors)

    def validate(self, schema: Schema, instance: Any) -> list[ValidationError]:
        """按 Schema 校验实例。

        Args:
            schema: 已通过 verify 的根 Schema。
            instance: 已解析的 JSON 值。

        Returns:
            按发现顺序排列的校验错误列表，实例合法时为空列表。

        Raises:
            MaxDepthExceededError: ref 跳转时帧数已达 max_depth 时抛出。
            InstanceTooDeepError: 嵌套过深导致解释器递归栈耗尽时抛出。
        """
        vm = _VM(schema, self.max_depth, self.max_errors)
        try:
            vm.validate(schema, instance)
        except RecursionError as e:
            raise InstanceTooDeepError("instance or ref chain nested too deeply") from e

        if vm.stopped:
            logger.debug(f"Stopped after reaching max_errors={self.max_errors}")
        logger.debug(f"Validation finished with {len(vm.errors)} error(s)")
        return vm.errors


def validate(
    schema: Schema,
    instance: Any,
    max_depth: int | None = None,
    max_errors: int | None = None,
) -> list[ValidationError]:
    """按 Schema 校验实例的便捷函数。

    等价于 ``Validator(max_depth, max_errors).validate(schema, instance)``。
    """
    return Validator(max_depth=max_depth, max_errors=max_errors).validate(schema, instance)

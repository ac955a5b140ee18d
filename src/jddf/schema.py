"""JDDF Schema 模型模块。

本模块定义了 JDDF Schema 的数据模型及其生命周期操作，包括：
- Form: Schema 的八种互斥形式
- Schema: Schema 模型（不可变的 Pydantic 模型）
- Discriminator: 判别器定义
- from_json: 从 JSON 对象反序列化（仅做字段形状检查）
- verify: 语义校验（形式互斥、引用存在、属性互斥、判别器映射）
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from jddf.constants import TYPES
from jddf.exceptions import DeserializationError, InvalidSchemaError
from jddf.logger import logger


class Form(str, Enum):
    """Schema 的形式。

    一个 Schema 只能处于以下八种形式之一，由已设置的字段按优先级推导得出。
    """

    REF = "ref"
    TYPE = "type"
    ENUM = "enum"
    ELEMENTS = "elements"
    PROPERTIES = "properties"
    VALUES = "values"
    DISCRIMINATOR = "discriminator"
    EMPTY = "empty"


def _parse_schema(value: Any, keyword: str) -> Schema:
    if not isinstance(value, Mapping):
        raise DeserializationError(keyword, "must be an object")
    return Schema.from_json(value)


def _parse_schema_map(value: Any, keyword: str) -> dict[str, Schema]:
    if not isinstance(value, Mapping):
        raise DeserializationError(keyword, "must be an object")
    return {key: _parse_schema(sub_value, keyword) for key, sub_value in value.items()}


def _parse_enum(value: Any) -> frozenset[str]:
    """解析 enum 关键字。

    Args:
        value: enum 的原始取值。

    Returns:
        去重后的字符串集合。

    Raises:
        DeserializationError: 非数组、空数组、含非字符串元素或含重复值时抛出。
    """
    if not isinstance(value, list):
        raise DeserializationError("enum", "must be an array")
    if not value:
        raise DeserializationError("enum", "must not be empty")
    for item in value:
        if not isinstance(item, str):
            raise DeserializationError("enum", "elements must be strings")
    members = frozenset(value)
    if len(members) != len(value):
        raise DeserializationError("enum", "contains duplicate values")
    return members


class Schema(BaseModel):
    """JDDF Schema。

    字段全部可选，至多一组“形式定义”字段被设置。构造后视为不可变，
    可以在多个校验调用（包括并发调用）之间共享。

    建议使用 :meth:`from_json` 构造，再调用 :meth:`verify` 做语义校验：

        schema = Schema.from_json({"elements": {"type": "string"}}).verify()

    Attributes:
        definitions: 可被 ref 引用的定义，仅允许出现在根 Schema 上。
        ref: 对 definitions 中某个定义的引用。
        type: 基本类型名称。
        enum: 允许的字符串集合。
        elements: 数组元素的 Schema。
        properties: 必需属性的 Schema。
        optional_properties: 可选属性的 Schema。
        additional_properties: 是否允许未声明的属性。
        values: 对象取值的 Schema。
        discriminator: 判别器定义。
    """

    definitions: dict[str, Schema] | None = None
    ref: str | None = None
    type: str | None = None
    enum: frozenset[str] | None = None
    elements: Schema | None = None
    properties: dict[str, Schema] | None = None
    optional_properties: dict[str, Schema] | None = None
    additional_properties: bool | None = None
    values: Schema | None = None
    discriminator: Discriminator | None = None
    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_json(cls, value: Any) -> Schema:
        """从 JSON 对象反序列化 Schema。

        只检查每个已知关键字的取值形状，不检查字段之间的约束（由 verify 负责）。
        未知关键字会被忽略。

        Args:
            value: 已解析的 JSON 对象。

        Returns:
            反序列化得到的 Schema。

        Raises:
            DeserializationError: 输入不是对象，或某个关键字取值形状错误时抛出。
        """
        if not isinstance(value, Mapping):
            raise DeserializationError(None, "schema must be an object")

        fields: dict[str, Any] = {}

        if "definitions" in value:
            fields["definitions"] = _parse_schema_map(value["definitions"], "definitions")

        if "ref" in value:
            if not isinstance(value["ref"], str):
                raise DeserializationError("ref", "must be a string")
            fields["ref"] = value["ref"]

        if "type" in value:
            if not isinstance(value["type"], str) or value["type"] not in TYPES:
                raise DeserializationError("type", f"must be one of {list(TYPES)}")
            fields["type"] = value["type"]

        if "enum" in value:
            fields["enum"] = _parse_enum(value["enum"])

        if "elements" in value:
            fields["elements"] = _parse_schema(value["elements"], "elements")

        if "properties" in value:
            fields["properties"] = _parse_schema_map(value["properties"], "properties")

        if "optionalProperties" in value:
            fields["optional_properties"] = _parse_schema_map(
                value["optionalProperties"], "optionalProperties"
            )

        if "additionalProperties" in value:
            if not isinstance(value["additionalProperties"], bool):
                raise DeserializationError("additionalProperties", "must be a boolean")
            fields["additional_properties"] = value["additionalProperties"]

        if "values" in value:
            fields["values"] = _parse_schema(value["values"], "values")

        if "discriminator" in value:
            fields["discriminator"] = Discriminator.from_json(value["discriminator"])

        return cls(**fields)

    def to_json(self) -> dict[str, Any]:
        """序列化为 JSON 对象（使用线上关键字名称，省略未设置的字段）。

        Returns:
            可直接交给 JSON 编码器的字典。enum 按字典序输出。
        """
        out: dict[str, Any] = {}
        if self.definitions is not None:
            out["definitions"] = {k: v.to_json() for k, v in self.definitions.items()}
        if self.ref is not None:
            out["ref"] = self.ref
        if self.type is not None:
            out["type"] = self.type
        if self.enum is not None:
            out["enum"] = sorted(self.enum)
        if self.elements is not None:
            out["elements"] = self.elements.to_json()
        if self.properties is not None:
            out["properties"] = {k: v.to_json() for k, v in self.properties.items()}
        if self.optional_properties is not None:
            out["optionalProperties"] = {
                k: v.to_json() for k, v in self.optional_properties.items()
            }
        if self.additional_properties is not None:
            out["additionalProperties"] = self.additional_properties
        if self.values is not None:
            out["values"] = self.values.to_json()
        if self.discriminator is not None:
            out["discriminator"] = self.discriminator.to_json()
        return out

    def form(self) -> Form:
        """按优先级推导 Schema 的形式。

        优先级：ref > type > enum > elements > properties > values > discriminator > empty。
        只有通过 verify 的 Schema 才保证结果有意义。
        """
        if self.ref is not None:
            return Form.REF
        if self.type is not None:
            return Form.TYPE
        if self.enum is not None:
            return Form.ENUM
        if self.elements is not None:
            return Form.ELEMENTS
        if self.properties is not None or self.optional_properties is not None:
            return Form.PROPERTIES
        if self.values is not None:
            return Form.VALUES
        if self.discriminator is not None:
            return Form.DISCRIMINATOR
        return Form.EMPTY

    def verify(self, root: Schema | None = None) -> Schema:
        """对 Schema 做语义校验。

        递归检查所有嵌套 Schema，ref 始终相对于根 Schema 的 definitions 解析。
        遇到第一个违规即失败。

        Args:
            root: 根 Schema，默认为自身。

        Returns:
            自身，便于与 from_json 链式调用。

        Raises:
            InvalidSchemaError: Schema 违反语义规则时抛出。
        """
        if root is None:
            root = self
        self._verify(root, root is self, [])
        if root is self:
            logger.debug(f"Schema verified (form: {self.form().value})")
        return self

    def _verify(self, root: Schema, is_root: bool, path: list[str]) -> None:
        if self.definitions is not None:
            if not is_root:
                raise InvalidSchemaError(path, "definitions may only appear on the root schema")
            for name, definition in self.definitions.items():
                definition._verify(root, False, [*path, "definitions", name])

        empty = True

        if self.ref is not None:
            empty = False
            if root.definitions is None or self.ref not in root.definitions:
                raise InvalidSchemaError(
                    [*path, "ref"], f"reference to non-existent definition {self.ref!r}"
                )

        if self.type is not None:
            _check_exclusive(empty, path, "type")
            empty = False
            if self.type not in TYPES:
                raise InvalidSchemaError([*path, "type"], f"unknown type {self.type!r}")

        if self.enum is not None:
            _check_exclusive(empty, path, "enum")
            empty = False
            if not self.enum:
                raise InvalidSchemaError([*path, "enum"], "enum must not be empty")

        if self.elements is not None:
            _check_exclusive(empty, path, "elements")
            empty = False
            self.elements._verify(root, False, [*path, "elements"])

        if self.properties is not None or self.optional_properties is not None:
            _check_exclusive(empty, path, "properties")
            empty = False
            for key, sub_schema in (self.properties or {}).items():
                sub_schema._verify(root, False, [*path, "properties", key])
            for key, sub_schema in (self.optional_properties or {}).items():
                sub_schema._verify(root, False, [*path, "optionalProperties", key])

        if self.values is not None:
            _check_exclusive(empty, path, "values")
            empty = False
            self.values._verify(root, False, [*path, "values"])

        if self.properties is not None and self.optional_properties is not None:
            shared = self.properties.keys() & self.optional_properties.keys()
            if shared:
                raise InvalidSchemaError(
                    path,
                    f"properties and optionalProperties share keys: {sorted(shared)}",
                )

        if self.discriminator is not None:
            _check_exclusive(empty, path, "discriminator")
            empty = False
            tag = self.discriminator.tag
            for key, sub_schema in self.discriminator.mapping.items():
                sub_path = [*path, "discriminator", "mapping", key]
                sub_schema._verify(root, False, sub_path)
                if sub_schema.form() is not Form.PROPERTIES:
                    raise InvalidSchemaError(sub_path, "mapping value must be of properties form")
                if tag in (sub_schema.properties or {}) or tag in (
                    sub_schema.optional_properties or {}
                ):
                    raise InvalidSchemaError(
                        sub_path, f"mapping value redeclares discriminator tag {tag!r}"
                    )


def _check_exclusive(empty: bool, path: list[str], keyword: str) -> None:
    if not empty:
        raise InvalidSchemaError(path, f"invalid form: {keyword} combined with another form")


class Discriminator(BaseModel):
    """判别器定义。

    Attributes:
        tag: 实例中用作判别标签的属性名。
        mapping: 标签取值到 properties 形式 Schema 的映射。
    """

    tag: str
    mapping: dict[str, Schema]
    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_json(cls, value: Any) -> Discriminator:
        """从 JSON 对象反序列化判别器。

        Raises:
            DeserializationError: 结构不是对象、tag 不是字符串或 mapping 不是对象时抛出。
        """
        if not isinstance(value, Mapping):
            raise DeserializationError("discriminator", "must be an object")
        if not isinstance(value.get("tag"), str):
            raise DeserializationError("tag", "must be a string")
        mapping = _parse_schema_map(value.get("mapping"), "mapping")
        return cls(tag=value["tag"], mapping=mapping)

    def to_json(self) -> dict[str, Any]:
        return {"tag": self.tag, "mapping": {k: v.to_json() for k, v in self.mapping.items()}}


Schema.model_rebuild()
Discriminator.model_rebuild()

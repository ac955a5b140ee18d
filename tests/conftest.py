"""测试配置和共享 fixtures。"""

import orjson
import pytest

from jddf.schema import Schema


@pytest.fixture
def person_schema():
    """包含必需属性和数组元素的 Schema。"""
    return Schema.from_json(
        {
            "properties": {
                "name": {"type": "string"},
                "age": {"type": "uint32"},
                "phones": {"elements": {"type": "string"}},
            }
        }
    ).verify()


@pytest.fixture
def cyclic_schema():
    """definitions 之间循环引用的 Schema。"""
    return Schema.from_json(
        {
            "definitions": {
                "a": {"ref": "b"},
                "b": {"ref": "a"},
            },
            "ref": "a",
        }
    ).verify()


@pytest.fixture
def write_json(tmp_path):
    """将 JSON 文档写入临时文件并返回路径。"""

    def _write(name, document):
        path = tmp_path / name
        path.write_bytes(orjson.dumps(document))
        return path

    return _write

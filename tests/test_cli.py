"""CLI 测试。"""

import orjson
from typer.testing import CliRunner

from jddf import __version__
from jddf.cli import app

runner = CliRunner()

PERSON_SCHEMA = {
    "properties": {
        "name": {"type": "string"},
        "age": {"type": "uint32"},
        "phones": {"elements": {"type": "string"}},
    }
}


class TestCLICommands:
    """基础命令测试。"""

    def test_version_command(self):
        """测试版本命令。"""
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert f"JDDF v{__version__}" in result.stdout

    def test_version_format(self):
        assert __version__ == "0.1.0"

    def test_help_command(self):
        """测试帮助命令。"""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "verify" in result.stdout
        assert "validate" in result.stdout


class TestVerify:
    """Schema 校验命令测试。"""

    def test_valid_schema(self, write_json):
        schema_file = write_json("schema.json", PERSON_SCHEMA)
        result = runner.invoke(app, ["verify", str(schema_file)])

        assert result.exit_code == 0
        assert "ok" in result.stdout

    def test_invalid_schema(self, write_json):
        schema_file = write_json("schema.json", {"ref": "missing"})
        result = runner.invoke(app, ["verify", str(schema_file)])

        assert result.exit_code == 1
        assert "non-existent" in result.output

    def test_malformed_schema(self, write_json):
        schema_file = write_json("schema.json", {"enum": []})
        result = runner.invoke(app, ["verify", str(schema_file)])

        assert result.exit_code == 1
        assert "enum" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["verify", str(tmp_path / "nope.json")])

        assert result.exit_code == 2

    def test_not_json(self, tmp_path):
        schema_file = tmp_path / "schema.json"
        schema_file.write_text("{not json")
        result = runner.invoke(app, ["verify", str(schema_file)])

        assert result.exit_code == 2


class TestValidate:
    """实例校验命令测试。"""

    def test_valid_instance(self, write_json):
        schema_file = write_json("schema.json", PERSON_SCHEMA)
        instance_file = write_json("instance.json", {"name": "a", "age": 1, "phones": []})
        result = runner.invoke(app, ["validate", str(schema_file), str(instance_file)])

        assert result.exit_code == 0
        assert orjson.loads(result.stdout) == []

    def test_invalid_instance(self, write_json):
        schema_file = write_json("schema.json", PERSON_SCHEMA)
        instance_file = write_json(
            "instance.json", {"age": "43", "phones": ["+44 1234567", 442345678]}
        )
        result = runner.invoke(app, ["validate", str(schema_file), str(instance_file)])

        assert result.exit_code == 1
        assert orjson.loads(result.stdout) == [
            {"instancePath": [], "schemaPath": ["properties", "name"]},
            {"instancePath": ["age"], "schemaPath": ["properties", "age", "type"]},
            {
                "instancePath": ["phones", "1"],
                "schemaPath": ["properties", "phones", "elements", "type"],
            },
        ]

    def test_max_errors_option(self, write_json):
        schema_file = write_json("schema.json", {"elements": {"type": "string"}})
        instance_file = write_json("instance.json", [1, 2, 3, 4])
        result = runner.invoke(
            app, ["validate", str(schema_file), str(instance_file), "--max-errors", "2"]
        )

        assert result.exit_code == 1
        assert len(orjson.loads(result.stdout)) == 2

    def test_max_depth_exceeded(self, write_json):
        schema_file = write_json("schema.json", {"definitions": {"a": {"ref": "a"}}, "ref": "a"})
        instance_file = write_json("instance.json", None)
        result = runner.invoke(
            app, ["validate", str(schema_file), str(instance_file), "--max-depth", "4"]
        )

        assert result.exit_code == 2
        assert "max depth" in result.output

    def test_invalid_schema(self, write_json):
        schema_file = write_json("schema.json", {"type": "string", "enum": ["a"]})
        instance_file = write_json("instance.json", "a")
        result = runner.invoke(app, ["validate", str(schema_file), str(instance_file)])

        assert result.exit_code == 2

    def test_limits_from_config(self, write_json, tmp_path):
        config_file = tmp_path / "jddf.yaml"
        config_file.write_text("max_errors: 1\n")
        schema_file = write_json("schema.json", {"values": {"type": "boolean"}})
        instance_file = write_json("instance.json", {"a": 1, "b": 2})
        result = runner.invoke(
            app,
            ["-c", str(config_file), "validate", str(schema_file), str(instance_file)],
        )

        assert result.exit_code == 1
        assert orjson.loads(result.stdout) == [
            {"instancePath": ["a"], "schemaPath": ["values", "type"]}
        ]

    def test_option_overrides_config(self, write_json, tmp_path):
        config_file = tmp_path / "jddf.yaml"
        config_file.write_text("max_errors: 1\n")
        schema_file = write_json("schema.json", {"values": {"type": "boolean"}})
        instance_file = write_json("instance.json", {"a": 1, "b": 2, "c": 3})
        result = runner.invoke(
            app,
            [
                "-c",
                str(config_file),
                "validate",
                str(schema_file),
                str(instance_file),
                "--max-errors",
                "3",
            ],
        )

        assert len(orjson.loads(result.stdout)) == 3

    def test_invalid_config(self, write_json, tmp_path):
        config_file = tmp_path / "jddf.yaml"
        config_file.write_text("max_errors: -1\n")
        result = runner.invoke(app, ["-c", str(config_file), "version"])

        assert result.exit_code == 2

"""JDDFTyper - 将 Schema 校验与实例校验暴露为 CLI 命令。"""

from pathlib import Path
from typing import Any

import orjson
import typer

from jddf import __version__
from jddf.config import ValidatorConfig
from jddf.constants import CONFIG_FILE_NAME
from jddf.exceptions import ConfigurationError, JDDFError
from jddf.logger import logger, setup_logging
from jddf.schema import Schema
from jddf.utils.file_ops import read_json
from jddf.validator import Validator

EXIT_INVALID_INSTANCE = 1
EXIT_USAGE_ERROR = 2


def _fail(message: str, code: int = EXIT_USAGE_ERROR) -> typer.Exit:
    """输出错误信息并构造退出异常。

    Args:
        message: 错误信息，写入 stderr。
        code: 退出码。

    Returns:
        供调用方 raise 的 typer.Exit。
    """
    typer.echo(f"error: {message}", err=True)
    return typer.Exit(code=code)


def _load_document(path: Path) -> Any:
    try:
        return read_json(path)
    except (OSError, orjson.JSONDecodeError) as e:
        raise _fail(f"failed to read {path}: {e}") from e


def _load_schema(path: Path, error_code: int = EXIT_INVALID_INSTANCE) -> Schema:
    """读取 Schema 文件并完成反序列化与语义校验。"""
    document = _load_document(path)
    try:
        return Schema.from_json(document).verify()
    except JDDFError as e:
        raise _fail(f"{path}: {e}", code=error_code) from e


class JDDFTyper(typer.Typer):
    """JDDF CLI 工具类。

    继承 typer.Typer。

    自动注册的命令：
    - verify: 校验 Schema 文件
    - validate: 按 Schema 校验实例文件
    - version: 显示版本信息

    全局选项：
    - --config, -c: YAML 配置文件路径
    - --log-level: 覆盖配置中的日志级别
    """

    def __init__(self, **kwargs: Any) -> None:
        """初始化 JDDFTyper。

        Args:
            **kwargs: 传递给 typer.Typer 的参数。
        """
        kwargs.setdefault("help", "JDDF (JSON Data Definition Format) 校验工具。")
        super().__init__(**kwargs)
        self._config: ValidatorConfig | None = None
        self._register_callback()
        self._register_commands()

    @property
    def config(self) -> ValidatorConfig:
        """当前生效的配置。

        Raises:
            RuntimeError: 如果 callback 尚未加载配置。
        """
        if self._config is None:
            raise RuntimeError("config not initialized, callback was not called")
        return self._config

    def _register_callback(self) -> None:
        """注册全局回调（处理配置与日志选项）。"""

        @self.callback()
        def main(
            config_path: Path = typer.Option(
                Path(CONFIG_FILE_NAME),
                "--config",
                "-c",
                help="YAML 配置文件路径",
            ),
            log_level: str | None = typer.Option(
                None,
                "--log-level",
                help="日志级别（覆盖配置文件）",
            ),
        ) -> None:
            """加载配置并配置日志。"""
            try:
                config = ValidatorConfig.from_yaml(config_path)
                if log_level is not None:
                    config = ValidatorConfig(
                        log_level=log_level,
                        max_depth=config.max_depth,
                        max_errors=config.max_errors,
                    )
            except (ConfigurationError, ValueError) as e:
                raise _fail(str(e)) from e
            self._config = config
            setup_logging(config.log_level)

    def _register_commands(self) -> None:
        """注册 CLI 命令。"""
        self._register_verify_command()
        self._register_validate_command()
        self._register_version_command()

    def _register_verify_command(self) -> None:
        """注册 verify 命令。"""

        @self.command()
        def verify(
            schema_file: Path = typer.Argument(..., help="Schema JSON 文件"),
        ) -> None:
            """校验 Schema 文件本身是否合法。

            合法时输出 ok；否则输出第一个违规并以退出码 1 结束。
            """
            schema = _load_schema(schema_file)
            logger.debug(f"{schema_file} has form {schema.form().value}")
            typer.echo("ok")

    def _register_validate_command(self) -> None:
        """注册 validate 命令。"""

        @self.command()
        def validate(
            schema_file: Path = typer.Argument(..., help="Schema JSON 文件"),
            instance_file: Path = typer.Argument(..., help="待校验的实例 JSON 文件"),
            max_depth: int | None = typer.Option(
                None,
                "--max-depth",
                help="最大 ref 跳转次数（覆盖配置文件）",
            ),
            max_errors: int | None = typer.Option(
                None,
                "--max-errors",
                help="最多输出的错误数量（覆盖配置文件）",
            ),
        ) -> None:
            """按 Schema 校验实例。

            以 JSON 数组输出全部校验错误（instancePath / schemaPath）。
            实例合法时退出码为 0，存在校验错误时为 1，Schema 或参数错误时为 2。
            """
            schema = _load_schema(schema_file, error_code=EXIT_USAGE_ERROR)
            instance = _load_document(instance_file)

            try:
                validator = Validator(
                    max_depth=max_depth if max_depth is not None else self.config.max_depth,
                    max_errors=max_errors if max_errors is not None else self.config.max_errors,
                )
                errors = validator.validate(schema, instance)
            except (JDDFError, ValueError) as e:
                raise _fail(str(e)) from e

            typer.echo(orjson.dumps([error.to_json() for error in errors]).decode("utf-8"))
            if errors:
                raise typer.Exit(code=EXIT_INVALID_INSTANCE)

    def _register_version_command(self) -> None:
        """注册 version 命令。"""

        @self.command()
        def version() -> None:
            """显示版本信息。"""
            typer.echo(f"JDDF v{__version__}")

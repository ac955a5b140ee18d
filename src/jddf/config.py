"""配置管理模块。

本模块负责管理 JDDF 校验器的配置，包括：
- 日志级别配置
- 引用深度上限（max_depth）
- 错误数量上限（max_errors）
- 从 YAML 配置文件加载
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from jddf.constants import CONFIG_FILE_NAME, DEFAULT_LOG_LEVEL, VALID_LOG_LEVELS
from jddf.exceptions import ConfigurationError
from jddf.utils.file_ops import read_yaml


class ValidatorConfig(BaseModel):
    """校验器配置模型。

    Attributes:
        log_level: 日志级别，默认为 INFO。
        max_depth: Schema 路径帧数上限（含根帧），None 表示不限制。
        max_errors: 最多收集的错误数量，None 表示不限制。
    """

    log_level: str = DEFAULT_LOG_LEVEL
    max_depth: int | None = None
    max_errors: int | None = None

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """验证日志级别。

        Args:
            v: 待验证的日志级别字符串。

        Returns:
            验证通过的大写日志级别。

        Raises:
            ValueError: 日志级别无效时抛出。
        """
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {sorted(VALID_LOG_LEVELS)}")
        return v_upper

    @field_validator("max_depth", "max_errors")
    @classmethod
    def validate_limit(cls, v: int | None) -> int | None:
        """验证校验上限。

        Raises:
            ValueError: 上限不是正整数时抛出。
        """
        if v is not None and v < 1:
            raise ValueError("limit must be a positive integer")
        return v

    @classmethod
    def from_yaml(cls, config_path: Path) -> "ValidatorConfig":
        """从 YAML 配置文件加载配置。

        Args:
            config_path: 配置文件路径，若为目录则读取其中的 jddf.yaml。

        Returns:
            加载的 ValidatorConfig 实例，若配置文件不存在则返回默认配置。

        Raises:
            ConfigurationError: 配置文件无法解析或取值非法时抛出。
        """
        if config_path.is_dir():
            config_path = config_path / CONFIG_FILE_NAME
        if not config_path.exists():
            return cls()

        try:
            data = read_yaml(config_path) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to read config {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config {config_path} must be a mapping")

        try:
            return cls(
                log_level=data.get("log_level", DEFAULT_LOG_LEVEL),
                max_depth=data.get("max_depth"),
                max_errors=data.get("max_errors"),
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid config {config_path}: {e}") from e

"""CLI 工具模块。

提供基于 typer 的命令行工具实现，
将 Schema 校验与实例校验暴露为 CLI 命令。

使用方式：
    ```bash
    # 校验 Schema 本身
    jddf verify schema.json

    # 按 Schema 校验实例，输出错误列表（JSON）
    jddf validate schema.json instance.json --max-errors 10

    # 显示版本
    jddf version
    ```
"""

from jddf.cli.jddf_typer import JDDFTyper

__all__ = ["JDDFTyper", "app", "main"]

app = JDDFTyper()


def main() -> None:
    """CLI 入口函数。

    用于 pyproject.toml 中的 project.scripts 注册。
    """
    app()

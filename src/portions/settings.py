"""Configuration management for class portions."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict, TomlConfigSettingsSource

from portions.render import OutputFormat, RankDir  # noqa: TC001


def _find_portions_toml(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for ``portions.toml``."""
    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / "portions.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


class GraphSettings(BaseSettings):
    """Portion graph construction settings."""

    hash_index: bool = Field(
        default=True, description="Look nodes up through a (name, kind) hash index instead of a linear scan."
    )


class RenderSettings(BaseSettings):
    """Text rendering settings."""

    format: OutputFormat = Field(default="table", description="Output format: 'table', 'json', 'dot', or 'mermaid'.")
    rankdir: RankDir = Field(default="LR", description="Graphviz rank direction for DOT output: TB, LR, BT, or RL.")


class PortionSettings(BaseSettings):
    """Root configuration for class portions."""

    model_config = SettingsConfigDict(
        toml_file="portions.toml",
        env_prefix="PORTIONS_",
        env_nested_delimiter="__",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_path = _find_portions_toml()
        sources: list[PydanticBaseSettingsSource] = [init_settings, env_settings]
        if toml_path:
            sources.append(TomlConfigSettingsSource(settings_cls, toml_file=toml_path))
        sources.append(file_secret_settings)
        return tuple(sources)

    snapshot_path: Path | None = Field(default=None, description="Default model snapshot for the CLI.")
    graph: GraphSettings = Field(default_factory=GraphSettings)
    render: RenderSettings = Field(default_factory=RenderSettings)

from pathlib import Path

from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="POST_NOTES_", toml_file="Config.toml")

    # Path settings
    content_dir: Path = Path("../notes")
    output_dir: Path = Path("./output")
    template_dir: Path = Path("./assets/templates")
    static_dir: Path = Path("./assets/static")

    # Front matter and content settings
    public_field: str = "public"
    media_prefix: str = "media/"
    redaction_marker: str = "Questions"

    # Pipeline settings
    max_workers: int | None = None
    bundle_assets: bool = True
    render_pages: bool = True

    log_level: str = "INFO"  # Can be DEBUG, INFO, WARNING, ERROR, CRITICAL

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Command line and environment win over Config.toml
        return init_settings, env_settings, TomlConfigSettingsSource(settings_cls)


settings = Settings()

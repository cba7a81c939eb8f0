"""Run configuration."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


ENVVAR_PREFIX = "MOVE_NUMERIC_FILES"


class RenumberConfig(BaseModel):
    """Settings for one renumbering run. Read-only for the duration of the walk."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(
        default=1,
        ge=0,
        description="The first number to consider when moving a duplicate file",
    )
    directory: Path = Field(
        default_factory=Path.cwd,
        description="Directory to search for files in",
    )
    keep_file: str | None = Field(
        default=None,
        description="When a duplicate number is found, the name of the file to keep. "
        "If not given, the first file name encountered is kept.",
    )
    dry_run: bool = Field(default=False, description="Plan renames without touching the filesystem")

    @field_validator("keep_file")
    @classmethod
    def _blank_keep_file_is_none(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

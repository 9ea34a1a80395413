from pydantic import BaseModel, Field
from typing import Literal

from pipe_preprocessor.models import RewriteOptions


class FilesConfig(BaseModel):
    glob: str = "*.svelte"
    encoding: str = "utf-8"


class PipesConfig(BaseModel):
    rewrite: RewriteOptions = Field(default_factory=RewriteOptions)
    files: FilesConfig = Field(default_factory=FilesConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"

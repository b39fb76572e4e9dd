# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

import os
import subprocess
import tomllib
from pathlib import Path
from typing import Any

import exitcode
from platformdirs import user_config_path
from pydantic import BaseModel, ConfigDict, Field, field_validator

from progopts.log import ColorMode, Loglevel


class Config(dict[str, Any]):
    def get_value(self, key: str, default: Any | None = None) -> Any | None:
        parts = key.split(".")
        subdict: dict[str, Any] | None = self
        val: Any | None = None

        for part in parts:
            if subdict is None:
                return default

            val = subdict.get(part)
            subdict = val if isinstance(val, dict) else None

        return val if val is not None else default


class Settings(BaseModel):
    """How :func:`progopts.cli.parse_or_exit` reports to the user.

    These settings never provide option values; they only control
    logging and the exit codes of the command line runner.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    loglevel: Loglevel | None = None
    color: ColorMode = ColorMode.AUTO
    help_exit_code: int = Field(default=exitcode.USAGE, gt=0, lt=256)
    error_exit_code: int = Field(default=exitcode.USAGE, gt=0, lt=256)

    @field_validator("loglevel", mode="before")
    @classmethod
    def _parse_loglevel(cls, value: Any) -> Any:
        if isinstance(value, str):
            return Loglevel.from_str(value)
        return value


def get_git_root() -> Path | None:
    try:
        p = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            capture_output=True,
            check=True,
        )
    except FileNotFoundError:
        return None
    except subprocess.CalledProcessError:
        return None
    return Path(p.stdout.decode().strip())


def get_config_dirs() -> list[Path]:
    user_conf = user_config_path("progopts")
    git_root = get_git_root()
    cwd = Path.cwd()
    if git_root is not None:
        return [cwd, git_root, user_conf]
    return [cwd, user_conf]


def search_config(
    filename: Path | None = None,
    extra_paths: list[Path] | None = None,
) -> Path | None:
    name = filename if filename is not None else Path("progopts.toml")
    if (s := os.getenv("PROGOPTS_CONFIG")) is not None:
        if (path := Path(s)).exists():
            return path
        raise FileNotFoundError(s)

    extra = []
    if extra_paths is not None:
        extra = extra_paths

    for dir_ in get_config_dirs() + extra:
        if (path := dir_.joinpath(name)).exists():
            return path

    return None


def load_config_file(
    filename: Path | None = None,
    extra_paths: list[Path] | None = None,
) -> tuple[Config, Path | None]:
    if (path := search_config(filename, extra_paths)) is not None:
        return Config(tomllib.loads(path.read_text())), path
    return Config(), None


def load_settings(config: Config | None = None) -> Settings:
    """Builds :class:`Settings` from the ``[progopts]`` table.

    :param config: An already loaded config; searched for if None.
    :raises pydantic.ValidationError: If the table holds invalid values.
    """
    if config is None:
        config, _ = load_config_file()
    return Settings.model_validate(config.get_value("progopts", {}))

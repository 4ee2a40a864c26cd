"""
Reading and merging the line-oriented .env file.

The file is parsed into an ordered list of EnvironmentVariable. Updates
replace existing keys in place and append new keys at the end, so lines the
wizard does not own keep their position. Comments and blank lines are not
preserved on rewrite.

Duplicate keys in the source text are resolved first-wins: the first line
defines both position and value, later lines with the same key are dropped.
"""

import os
import shutil
import tempfile
import time
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from agent_setup.config.schema import EnvironmentVariable
from agent_setup.utils.logger import logger


def parse_env(text: str) -> List[EnvironmentVariable]:
    """
    Parse .env content into an ordered list of variables.

    Args:
        text: Raw file content

    Returns:
        Variables in file order, without duplicates
    """
    variables: List[EnvironmentVariable] = []
    seen = set()

    for lineno, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            logger.debug("Ignoring .env line without '='", lineno=lineno)
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        if not key:
            logger.debug("Ignoring .env line with empty key", lineno=lineno)
            continue
        if key in seen:
            logger.debug("Ignoring duplicate .env key", key=key, lineno=lineno)
            continue

        seen.add(key)
        variables.append(EnvironmentVariable(key=key, value=value.strip()))

    return variables


def merge_variables(
    existing: Iterable[EnvironmentVariable],
    updates: Iterable[EnvironmentVariable],
) -> List[EnvironmentVariable]:
    """
    Merge updates into existing variables without mutating either input.

    Existing keys keep their position, new keys are appended in update order.
    An update without a value is kept as an empty declaration.
    """
    merged = [EnvironmentVariable(key=v.key, value=v.value) for v in existing]
    index: Dict[str, int] = {v.key: i for i, v in enumerate(merged)}

    for update in updates:
        value = update.value or ""
        if update.key in index:
            merged[index[update.key]] = EnvironmentVariable(key=update.key, value=value)
        else:
            index[update.key] = len(merged)
            merged.append(EnvironmentVariable(key=update.key, value=value))

    return merged


def serialize_env(variables: Iterable[EnvironmentVariable]) -> str:
    """Render variables as KEY=value lines joined by newlines, no trailing newline."""
    return "\n".join(f"{v.key}={v.value or ''}" for v in variables)


def variables_to_dict(variables: Iterable[EnvironmentVariable]) -> Dict[str, str]:
    return {v.key: v.value or "" for v in variables}


class EnvFile:
    """The .env file of a project, read and written as a whole."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> List[EnvironmentVariable]:
        """Load variables from disk. A missing file yields an empty list."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        return parse_env(text)

    def get(self, key: str) -> Optional[str]:
        for variable in self.load():
            if variable.key == key:
                return variable.value
        return None

    def write(self, variables: Iterable[EnvironmentVariable]) -> None:
        """
        Replace the file with the given variables.

        The content is written to a temporary file next to the target and
        moved into place, so readers never see a partial file. Errors
        propagate to the caller.
        """
        content = serialize_env(variables)
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            if self.path.exists():
                shutil.copymode(self.path, tmp_path)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

        logger.debug("Wrote .env file", path=str(self.path))

    def upsert(self, updates: Iterable[EnvironmentVariable]) -> List[EnvironmentVariable]:
        """Merge updates into the file on disk and return the merged variables."""
        merged = merge_variables(self.load(), updates)
        self.write(merged)
        return merged

    def backup(self) -> Path:
        """Move the current file aside as .env.backup.<unix-ms> and return the new path."""
        backup_path = self.path.with_name(
            f"{self.path.name}.backup.{int(time.time() * 1000)}"
        )
        os.rename(self.path, backup_path)
        logger.info("Backed up .env file", backup=str(backup_path))
        return backup_path

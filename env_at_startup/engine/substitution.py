"""
Substitution engine.
Replaces env references in one file with their values, backing the file up first.
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

from env_at_startup.config import SubstitutionConfig
from env_at_startup.engine.files import is_regular_file, write_atomic
from env_at_startup.engine.outcomes import Change, OperationOutcome
from env_at_startup.exceptions import VariableNotAllowedError, VariableNotSetError
from env_at_startup.variables import resolve_position


logger = logging.getLogger(__name__)

# Undecodable bytes (binaries, latin-1 files) round-trip unchanged
FILE_ENCODING = 'utf-8'
FILE_ERRORS = 'surrogateescape'


@dataclass
class RenderResult:
    """Substituted text plus bookkeeping for one pass over a file."""
    text: str
    replacements: Dict[str, int] = field(default_factory=dict)
    count: int = 0
    changes: List[Change] = field(default_factory=list)


def render_value(value: str) -> str:
    """Render a value as a double-quoted, escaped string literal."""
    return json.dumps(value, ensure_ascii=False)


def render(
    text: str,
    env: Mapping[str, str],
    config: SubstitutionConfig,
    path: Optional[str] = None
) -> RenderResult:
    """
    Substitute every reference in text.

    Args:
        text: Original file content
        env: Environment lookup; empty values count as unset
        config: Resolved configuration
        path: File path, used in errors and log messages

    Returns:
        RenderResult with the new text and counters

    Raises:
        VariableNotAllowedError: Reference outside the allow-list without allow_unreplaced
        VariableNotSetError: Allowed variable without a value and without allow_missing
    """
    result = RenderResult(text=text)
    pieces: List[str] = []
    cursor = 0

    for occurrence in config.scanner.scan(text):
        name = occurrence.name

        if not config.allow_list.is_allowed(name):
            if config.allow_unreplaced:
                logger.warning(f"Skipping {occurrence.text} in {path}")
                continue
            raise VariableNotAllowedError(occurrence.text, name, path)

        value = env.get(name)
        if value:
            replacement = render_value(value)
        elif config.allow_missing:
            replacement = config.undefined_literal
        else:
            raise VariableNotSetError(name, path)

        pieces.append(text[cursor:occurrence.offset])
        pieces.append(replacement)
        cursor = occurrence.offset + len(occurrence.text)

        result.replacements[name] = result.replacements.get(name, 0) + 1
        result.count += 1
        if config.verbose:
            position = resolve_position(text, occurrence.offset)
            result.changes.append(Change(position, occurrence.text, replacement))

    if pieces:
        pieces.append(text[cursor:])
        result.text = ''.join(pieces)

    return result


async def substitute(
    path: Union[str, Path],
    env: Mapping[str, str],
    config: SubstitutionConfig
) -> OperationOutcome:
    """
    Substitute env references in a single file.

    The original bytes are written to the backup path before the file itself
    is overwritten. Any failure is returned as a FAILED outcome; nothing is
    written unless every reference in the file could be handled.

    Args:
        path: Target file
        env: Environment lookup (read-only, shared across files)
        config: Resolved configuration

    Returns:
        OperationOutcome for the file
    """
    path = Path(path)
    try:
        if not await asyncio.to_thread(is_regular_file, path):
            logger.debug(f"Not a regular file, skipping: {path}")
            return OperationOutcome.skipped()

        original = await asyncio.to_thread(path.read_bytes)
        content = original.decode(FILE_ENCODING, FILE_ERRORS)

        result = render(content, env, config, str(path))
        if result.text == content:
            logger.debug(f"No references replaced in {path}")
            return OperationOutcome.untouched()

        backup_path = config.backup_path(path)
        await asyncio.to_thread(write_atomic, backup_path, original, mode_source=path)
        logger.debug(f"Wrote backup: {backup_path}")

        await asyncio.to_thread(write_atomic, path, result.text.encode(FILE_ENCODING, FILE_ERRORS))
        logger.debug(f"Replaced {result.count} references in {path}")

        return OperationOutcome.replaced(result.replacements, result.count, result.changes)

    except Exception as e:
        logger.debug(f"Substitution failed for {path}: {e}")
        return OperationOutcome.failed(e)

"""Rollback engine: restore a substituted file from its backup."""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Union

from env_at_startup.config import SubstitutionConfig
from env_at_startup.engine.files import exists_as_regular_file, is_regular_file, write_atomic
from env_at_startup.engine.outcomes import OperationOutcome


logger = logging.getLogger(__name__)


async def rollback(path: Union[str, Path], config: Optional[SubstitutionConfig] = None) -> OperationOutcome:
    """
    Restore a file from its backup and remove the backup.

    Running it again once the backup is gone reports NO_BACKUP, so repeated
    rollbacks are harmless.

    Args:
        path: Target file
        config: Configuration (only the backup suffix is used)

    Returns:
        OperationOutcome for the file
    """
    path = Path(path)
    config = config or SubstitutionConfig()
    try:
        if not await asyncio.to_thread(is_regular_file, path):
            logger.debug(f"Not a regular file, skipping: {path}")
            return OperationOutcome.skipped()

        backup_path = config.backup_path(path)
        if not await asyncio.to_thread(exists_as_regular_file, backup_path):
            logger.debug(f"No backup found for {path}")
            return OperationOutcome.no_backup()

        content = await asyncio.to_thread(backup_path.read_bytes)
        await asyncio.to_thread(write_atomic, path, content)
        await asyncio.to_thread(backup_path.unlink)
        logger.debug(f"Restored {path} from {backup_path}")

        return OperationOutcome.rolled_back()

    except Exception as e:
        logger.debug(f"Rollback failed for {path}: {e}")
        return OperationOutcome.failed(e)

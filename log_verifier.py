"""Check the hash chain of the verifier's diagnostic log."""

import hashlib
from pathlib import Path

from logger import get_logger

logger = get_logger(__name__)


def verify(path: Path) -> bool:
    """
    Recompute the chain written by HashChainingHandler.
    Args:
        path (Path): diagnostic log file
    Returns:
        bool: False on a missing file, a line without a hash or a broken link
    """
    prev = ''
    try:
        with open(path) as f:
            for idx, line in enumerate(f, 1):
                line = line.rstrip('\n')
                try:
                    content, hash_part = line.rsplit('| HASH:', 1)
                except ValueError:
                    logger.warning('Missing hash on line %d of %s', idx, path)
                    return False
                calc = hashlib.sha256((prev + content.removesuffix(' ')).encode()).hexdigest()
                if calc != hash_part.strip():
                    logger.warning('Hash mismatch at line %d of %s', idx, path)
                    return False
                prev = calc
    except FileNotFoundError:
        logger.warning('Log file not found: %s', path)
        return False
    return True

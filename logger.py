import logging
import hashlib
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

import config_loader

_FORMAT = logging.Formatter('[%(asctime)s] %(levelname)s %(name)s - %(message)s')
_configured = False


class HashChainingHandler(TimedRotatingFileHandler):
    """TimedRotatingFileHandler that appends a hash chain to each entry."""

    def __init__(self, filename: str, chain_file: Path, **kwargs) -> None:
        super().__init__(filename, **kwargs)
        self.prev_hash = ''
        self.chain_file = chain_file

    def emit(self, record: logging.LogRecord) -> None:  # type: ignore[override]
        try:
            if self.shouldRollover(record):
                self.doRollover()
            if self.stream is None:
                self.stream = self._open()
            # one physical line per entry keeps the chain verifiable
            line = self.format(record).replace('\n', ' | ')
            digest = hashlib.sha256((self.prev_hash + line).encode()).hexdigest()
            self.prev_hash = digest
            self.stream.write(f"{line} | HASH: {digest}{self.terminator}")
            self.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:  # type: ignore[override]
        super().close()
        if not self.prev_hash:
            return
        try:
            self.chain_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.chain_file, 'a') as f:
                f.write(self.prev_hash + '\n')
        except OSError:
            pass


def chain_path(log_path: Path) -> Path:
    return log_path.with_name(log_path.stem + '_chain.txt')


def _configure() -> None:
    global _configured
    if _configured:
        return
    config = config_loader.CONFIG
    root = logging.getLogger()
    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = HashChainingHandler(
            str(config.log_file),
            chain_path(config.log_file),
            when='midnight',
            backupCount=config.log_backup_count,
        )
        handler.setFormatter(_FORMAT)
        root.addHandler(handler)
    root.setLevel(config.log_level)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger with the given name after configuring logging."""
    _configure()
    return logging.getLogger(name)


def reset_logging() -> None:
    """Drop handlers installed by _configure (for tests)."""
    global _configured
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, HashChainingHandler):
            root.removeHandler(handler)
            handler.close()
    _configured = False

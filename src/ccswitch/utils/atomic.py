# ABOUTME: Atomic file replacement (temp file in the same directory + os.replace)
# ABOUTME: Readers see either the old or the new content, never a truncated file
import os
import tempfile
from pathlib import Path

from ccswitch.errors import ConfigIOError


def atomic_write_text(path: Path, content: str) -> None:
    """Write content to path atomically.

    ABOUTME: Creates parent directories if needed
    ABOUTME: Temp file lives next to the target so os.replace stays on one filesystem

    Raises:
        ConfigIOError: If the directory or file cannot be written
    """
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            delete=False,
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
        ) as tf:
            tmp_name = tf.name
            tf.write(content)
            tf.flush()
            os.fsync(tf.fileno())
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ConfigIOError(path, f"write failed: {e}") from e

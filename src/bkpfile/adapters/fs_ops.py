import os
import shutil
import tempfile
import time
from pathlib import Path

DISK_SPACE_PHRASES = (
    "no space left",
    "disk full",
    "not enough space",
    "insufficient disk space",
    "device full",
    "quota exceeded",
    "file too large",
)


def is_disk_space_error(err: BaseException | None) -> bool:
    """Best-effort check whether an error message reports a full disk or quota."""
    if err is None:
        return False
    message = str(err).lower()
    return any(phrase in message for phrase in DISK_SPACE_PHRASES)


def compare_files(a: str | Path, b: str | Path) -> bool:
    """Byte-for-byte comparison; raises OSError if either file is unreadable."""
    data_a = Path(a).read_bytes()
    data_b = Path(b).read_bytes()
    if len(data_a) != len(data_b):
        return False
    return data_a == data_b


def copy_file(src: str | Path, dst: str | Path) -> None:
    """
    Copy ``src`` to ``dst`` preserving permission bits and mtime.

    Content goes to a short hidden temp file next to ``dst`` which is renamed
    into place once mode and mtime are set, so ``dst`` never holds a partial
    copy. The temp name has a fixed length so any legal backup name works.
    """
    src_path = Path(src)
    dst_path = Path(dst)

    data = src_path.read_bytes()
    src_stat = src_path.stat()

    dst_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=dst_path.parent, prefix=".bkp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        shutil.copymode(src_path, tmp_name)
        os.utime(tmp_name, ns=(time.time_ns(), src_stat.st_mtime_ns))
        os.replace(tmp_name, dst_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

import logging
import os

_log = logging.getLogger(__name__)

def write_atomically(path: str, data: bytes) -> None:
    """Writes to a sibling temp file and moves it over path, so a failed run never leaves a partial file"""
    tmp_path = path + ".tmp"
    try:
        with open(tmp_path, "wb") as out_file:
            out_file.write(data)
        os.replace(tmp_path, path)
    except OSError:
        try:
            os.remove(tmp_path)
        except FileNotFoundError:
            ...
        raise
    _log.info("Wrote %d bytes to %s", len(data), path)

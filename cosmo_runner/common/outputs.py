# © 2023 fezjo
import os

from cosmo_runner.common.messages import Logger, default_logger


def _raise(e: OSError) -> None:
    raise e


def collect_output_files(output_dir: str, logger: Logger = default_logger) -> list[str]:
    """
    Paths of all regular files under `output_dir`, relative to it.
    A missing directory yields an empty list, a directory which can't be
    walked raises OSError.
    """
    if not os.path.exists(output_dir):
        logger.warning(f"Output directory does not exist: {output_dir}")
        return []

    files: list[str] = []
    for dirpath, _, filenames in os.walk(output_dir, onerror=_raise):
        for f in filenames:  # includes links
            fp = os.path.join(dirpath, f)
            if os.path.isfile(fp):
                files.append(os.path.relpath(fp, output_dir))
    return sorted(files)

"""
Batch conversion of many inputs with one configuration.
"""

import concurrent.futures
import os
from dataclasses import dataclass, field
from pathlib import Path

from ..core.errors import ToKtxError
from ..core.utils import TEMP_SUFFIX, log_info, log_verbose, log_warning
from .input_source import PathSource, input_source


@dataclass
class BatchResult:
    """
    Outcome of ``convert_many``.

    Attributes:
        written: Destination paths that were written, in input order.
        failed: Errors keyed by the index of the input that failed.
    """

    written: list[Path] = field(default_factory=list)
    failed: dict[int, ToKtxError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


def output_name(source, index: int, suffix: str = TEMP_SUFFIX) -> str:
    """File name for an input: the input's stem for path inputs, ``texture_00001`` otherwise."""
    if isinstance(source, PathSource):
        return Path(os.fspath(source.path)).stem + suffix
    return f"texture_{index:05}{suffix}"


def convert_many(config, sources, output_dir, max_workers: int = 4, cleanup: bool = True) -> BatchResult:
    """
    Convert each input to a KTX file in ``output_dir`` using a thread pool.

    A failure for one input does not stop the others; it is logged and recorded in
    ``BatchResult.failed``.

    Args:
        config: The ToKtx configuration shared by every conversion.
        sources: Inputs accepted by ``ToKtx.convert``.
        output_dir: Directory for the output files. Created if missing.
        max_workers: Number of toktx processes to run at once.
        cleanup: Delete temp files written for in-memory inputs.

    Returns:
        A BatchResult.
    """
    sources = [input_source(s) for s in sources]
    if not sources:
        return BatchResult()

    output_dir = Path(output_dir)
    os.makedirs(output_dir, exist_ok=True)

    jobs = []
    used_names = set()
    for i, source in enumerate(sources):
        name = output_name(source, i)
        # Two inputs with the same stem must not overwrite each other
        if name in used_names:
            name = f"{Path(name).stem}_{i:05}{TEMP_SUFFIX}"
        used_names.add(name)
        jobs.append((i, source, output_dir / name))

    log_verbose("convert_many", f"Converting {len(jobs)} input(s) with {max_workers} worker(s).")

    def convert_single(job):
        index, source, dest = job
        config.convert(source).to_path(dest, cleanup=cleanup)
        return index, dest

    result = BatchResult()
    written = {}
    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {executor.submit(convert_single, job): job for job in jobs}
        for future in concurrent.futures.as_completed(futures):
            index, source, dest = futures[future]
            try:
                _, path = future.result()
            except ToKtxError as e:
                log_warning("convert_many", f"toktx failed for {source!r}: {e}")
                result.failed[index] = e
            else:
                written[index] = path

    result.written = [written[i] for i in sorted(written)]
    log_info("convert_many", f"Converted {len(result.written)}/{len(jobs)} input(s).")
    return result

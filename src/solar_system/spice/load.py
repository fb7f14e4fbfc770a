"""SPICE kernel loading for the analytic-series ephemeris source."""

from __future__ import annotations

import logging
from pathlib import Path

import cspyce

from solar_system.config import get_spice_path
from solar_system.spice.common import get_state

logger = logging.getLogger(__name__)

KERNEL_LIST = 'SPICE_kernels.txt'


def load_spice_kernels() -> tuple[bool, str | None]:
    """Furnish the kernels listed in SPICE_kernels.txt under SPICE_PATH.

    The list holds one kernel file name per line (optionally quoted);
    blank lines and lines starting with ``!`` are ignored.

    Returns:
        (True, None) if at least one kernel was loaded, (False, reason) otherwise.
    """
    state = get_state()
    if state.kernels_loaded:
        return (True, None)
    base = Path(get_spice_path())
    if not base.exists():
        return (False, f'SPICE_PATH directory does not exist: {base}')
    if not base.is_dir():
        return (False, f'SPICE_PATH is not a directory: {base}')
    config_path = base / KERNEL_LIST
    if not config_path.exists():
        logger.warning('Kernel list not found: %s', config_path)
        return (
            False,
            f'{KERNEL_LIST} not found under {base}. '
            f'Ensure SPICE_PATH points to a SPICE kernel tree that includes {KERNEL_LIST}.',
        )
    loaded: list[str] = []
    with config_path.open() as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith('!'):
                continue
            filename = line.split()[0].strip('"')
            kpath = base / filename
            if not kpath.exists():
                logger.error('%s line %d: kernel file not found: %s', KERNEL_LIST, line_no, kpath)
                continue
            try:
                cspyce.furnsh(str(kpath))
                loaded.append(str(kpath))
            except Exception as e:
                logger.warning('Failed to load %s: %s', kpath, e)
    if not loaded:
        return (
            False,
            f'No kernel files listed in {config_path} could be loaded. '
            'Check that the listed kernel files exist.',
        )
    state.kernel_files = loaded
    state.kernels_loaded = True
    logger.debug('Loaded %d SPICE kernels from %s', len(loaded), base)
    return (True, None)


def unload_spice_kernels() -> None:
    """Clear the SPICE kernel pool and reset bookkeeping."""
    state = get_state()
    if state.kernels_loaded:
        cspyce.kclear()
    state.reset()

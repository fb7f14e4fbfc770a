"""Shared state for the SPICE layer (which kernels are furnished)."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SpiceState:
    """Kernel bookkeeping for SPICE-backed analytic series.

    Modified by load_spice_kernels and unload_spice_kernels.
    """

    kernels_loaded: bool = False
    kernel_files: list[str] = field(default_factory=list)

    def reset(self) -> None:
        """Forget all furnished kernels."""
        self.kernels_loaded = False
        self.kernel_files = []


# Module-level singleton; SPICE's kernel pool is process-global as well.
_state = SpiceState()


def get_state() -> SpiceState:
    """Return the global SpiceState instance."""
    return _state

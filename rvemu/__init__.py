"""Building blocks for an RV32 RISC-V emulator: hart state, an ordered map, a memory pool, float and clock helpers."""

__version__ = "0.1.0"
__all__ = ["rbmap", "mpool", "softfloat", "timeutil", "riscv"]
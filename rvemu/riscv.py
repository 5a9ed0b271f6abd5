"""RV32 hart state: registers, control and status registers, and the block map."""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

WORD_MASK = 0xFFFFFFFF

N_REGS = 32
"""Number of integer (and floating-point) registers."""

DEFAULT_STACK_ADDR = 0xFFFFF000
"""Initial value of the stack pointer after a reset."""

DEFAULT_BLOCK_MAP_BITS = 10


class Reg(enum.IntEnum):
    """Integer registers by ABI name."""

    zero = 0  # hard-wired zero, writes are ignored
    ra = 1  # return address
    sp = 2  # stack pointer
    gp = 3  # global pointer
    tp = 4  # thread pointer
    t0 = 5  # temporary / alternate link register
    t1 = 6
    t2 = 7
    s0 = 8  # saved register / frame pointer
    s1 = 9
    a0 = 10  # function arguments / return values
    a1 = 11
    a2 = 12
    a3 = 13
    a4 = 14
    a5 = 15
    a6 = 16
    a7 = 17
    s2 = 18
    s3 = 19
    s4 = 20
    s5 = 21
    s6 = 22
    s7 = 23
    s8 = 24
    s9 = 25
    s10 = 26
    s11 = 27
    t3 = 28
    t4 = 29
    t5 = 30
    t6 = 31


class Csr(enum.IntEnum):
    """Control and status register numbers."""

    FFLAGS = 0x001
    FRM = 0x002
    FCSR = 0x003

    MSTATUS = 0x300
    MISA = 0x301
    MEDELEG = 0x302
    MIDELEG = 0x303
    MIE = 0x304
    MTVEC = 0x305
    MCOUNTEREN = 0x306

    MSCRATCH = 0x340
    MEPC = 0x341
    MCAUSE = 0x342
    MTVAL = 0x343
    MIP = 0x344

    CYCLE = 0xC00
    TIME = 0xC01
    INSTRET = 0xC02

    CYCLEH = 0xC80
    TIMEH = 0xC81
    INSTRETH = 0xC82

    MVENDORID = 0xF11
    MARCHID = 0xF12
    MIMPID = 0xF13
    MHARTID = 0xF14


@dataclass(frozen=True)
class Features:
    """Optional ISA extensions and emulator facilities."""

    ext_m: bool = True
    ext_a: bool = True
    ext_c: bool = True
    ext_f: bool = True
    zicsr: bool = True
    zifencei: bool = True
    sdl: bool = True
    gdbstub: bool = True
    arc: bool = False


@dataclass
class RiscvIO:
    """Memory and system callbacks the hart uses to reach its environment."""

    mem_ifetch: Optional[Callable[["Riscv", int], int]] = None
    mem_read_w: Optional[Callable[["Riscv", int], int]] = None
    mem_read_s: Optional[Callable[["Riscv", int], int]] = None
    mem_read_b: Optional[Callable[["Riscv", int], int]] = None
    mem_write_w: Optional[Callable[["Riscv", int, int], None]] = None
    mem_write_s: Optional[Callable[["Riscv", int, int], None]] = None
    mem_write_b: Optional[Callable[["Riscv", int, int], None]] = None
    on_ecall: Optional[Callable[["Riscv"], None]] = None
    on_ebreak: Optional[Callable[["Riscv"], None]] = None
    allow_misalign: bool = False


@dataclass
class Block:
    """A translated basic block."""

    pc_start: int = 0
    pc_end: int = 0
    insn_capacity: int = 0
    predict: Optional["Block"] = None
    ir: List[Any] = field(default_factory=list)

    @property
    def n_insn(self) -> int:
        return len(self.ir)


class BlockMap:
    """A fixed-capacity table of translated blocks."""

    def __init__(self, bits: int = DEFAULT_BLOCK_MAP_BITS):
        if bits < 0:
            raise ValueError("bits must be non-negative")
        self.capacity = 1 << bits
        self.size = 0
        self.map: List[Optional[Block]] = [None] * self.capacity

    def clear(self) -> None:
        """Drop every block."""
        self.map = [None] * self.capacity
        self.size = 0


def sign_extend_h(x: int) -> int:
    """Sign-extend the low 16 bits of ``x`` to a 32-bit unsigned word."""
    x &= 0xFFFF
    return (x | 0xFFFF0000) if x & 0x8000 else x


def sign_extend_b(x: int) -> int:
    """Sign-extend the low 8 bits of ``x`` to a 32-bit unsigned word."""
    x &= 0xFF
    return (x | 0xFFFFFF00) if x & 0x80 else x


class Riscv:
    """The architectural state of one RV32 hart."""

    FEATURES = Features()

    def __init__(self, io: RiscvIO, userdata: Any = None, output_exit_code: bool = False):
        if io is None:
            raise ValueError("an I/O interface is required")
        self.features = self.FEATURES
        self.io = dataclasses.replace(io)
        self.userdata = userdata
        self.output_exit_code = output_exit_code
        self.block_map = BlockMap(DEFAULT_BLOCK_MAP_BITS)

        self.X: List[int] = [0] * N_REGS
        self._pc = 0
        self.F: List[int] = [0] * N_REGS
        self.csr_fcsr = 0

        self.csr_cycle = 0
        self.csr_time = [0, 0]
        self.csr_mstatus = 0
        self.csr_mtvec = 0
        self.csr_misa = 0
        self.csr_mtval = 0
        self.csr_mcause = 0
        self.csr_mscratch = 0
        self.csr_mepc = 0
        self.csr_mip = 0
        self.csr_mbadaddr = 0

        self.compressed = False
        self.halted = False
        self.reset(0)

    def reset(self, pc: int = 0) -> None:
        """Clear the registers and start again at ``pc``."""
        self.X = [0] * N_REGS
        self._pc = pc & WORD_MASK
        self.X[Reg.sp] = DEFAULT_STACK_ADDR

        self.csr_mtvec = 0
        self.csr_cycle = 0
        self.csr_mstatus = 0

        if self.features.ext_f:
            self.F = [0] * N_REGS
            self.csr_fcsr = 0

        self.halted = False

    @property
    def pc(self) -> int:
        return self._pc

    @pc.setter
    def pc(self, value: int) -> None:
        self.set_pc(value)

    def set_pc(self, pc: int) -> None:
        """Jump to ``pc``; raise ValueError if it is not suitably aligned."""
        align_mask = 1 if self.features.ext_c else 3
        if pc & align_mask:
            raise ValueError(f"misaligned program counter 0x{pc & WORD_MASK:08x}")
        self._pc = pc & WORD_MASK

    def set_reg(self, reg: int, value: int) -> None:
        """Write an integer register; writes to x0 or unknown registers are ignored."""
        if 0 <= reg < N_REGS and reg != Reg.zero:
            self.X[reg] = value & WORD_MASK

    def get_reg(self, reg: int) -> int:
        """Read an integer register; unknown registers read as all ones."""
        if 0 <= reg < N_REGS:
            return self.X[reg]
        return WORD_MASK

    def halt(self) -> None:
        """Stop the hart."""
        self.halted = True
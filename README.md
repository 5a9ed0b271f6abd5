# rvemu

Core pieces of an RV32 RISC-V emulator, written in pure Python with no
third-party dependencies.

## Contents

- `rvemu.riscv` – the state of one hart.
  - `Riscv(io, userdata=None, output_exit_code=False)` holds the integer
    registers `X`, the float registers `F`, the program counter `pc`, the
    CSR fields (`csr_cycle`, `csr_mstatus`, `csr_mtvec`, `csr_fcsr`, ...),
    the `halted` flag and a `block_map`.
  - `reset(pc=0)` clears the registers, sets `pc` and puts the stack pointer
    at `DEFAULT_STACK_ADDR` (`0xFFFFF000`).
  - `set_pc(pc)` raises `ValueError` for a misaligned address (2-byte
    alignment with the compressed extension enabled, 4-byte otherwise).
  - `set_reg(reg, value)` ignores writes to `x0` and to unknown registers;
    `get_reg(reg)` returns `0xFFFFFFFF` for an unknown register.
  - `halt()` sets `halted`.
  - `RiscvIO` is a dataclass of memory and system callbacks plus
    `allow_misalign`; `Reg` names the integer registers by ABI name
    (`Reg.zero`, `Reg.sp`, `Reg.a0`, ...); `Csr` lists CSR numbers;
    `Features` lists the enabled extensions; `Block` and `BlockMap` hold
    translated basic blocks; `sign_extend_h` and `sign_extend_b` sign-extend
    16- and 8-bit values to 32-bit words.
- `rvemu.rbmap` – `RBMap`, an ordered map on a red-black tree with a custom
  comparison function (`cmp_int` and `cmp_uint` are provided). It offers
  `insert` (returns `False` for a duplicate key and leaves the map
  unchanged), `find` (returns `None` when absent), `erase` (raises
  `KeyError` when absent), `clear`, `is_empty`, `first`, `last`, `items`,
  `len()`, `in`, indexing and iteration in key order.
- `rvemu.mpool` – `MemoryPool(pool_size, chunk_size)`, a fixed-size chunk
  allocator handing out writable `memoryview` chunks. `alloc`, `calloc`
  (zero-filled) and `free` work on chunks; the pool adds another arena when
  it runs out. `destroy` releases it, and it can be used as a context
  manager.
- `rvemu.softfloat` – IEEE-754 single-precision bit helpers: `calc_fclass`
  (the FCLASS.S mask), `is_nan` and `is_snan`, with the `FMASK_*`,
  `FFLAG_*` and `RV_NAN` constants.
- `rvemu.timeutil` – `gettimeofday()` returns a `TimeVal(sec, usec)` and
  `clock_gettime()` a `TimeSpec(sec, nsec)` whose `nsec` field carries
  milliseconds; both read the monotonic clock.

## Installation

```
pip install .
```

To install the test tools as well:

```
pip install ".[test]"
```

## Examples

```python
from rvemu.rbmap import RBMap, cmp_int

fds = RBMap(cmp_int)
fds.insert(0, "stdin")
fds.insert(1, "stdout")
assert fds.insert(1, "again") is False   # duplicate keys are rejected
assert list(fds) == [0, 1]
fds.erase(0)
assert len(fds) == 1
```

```python
from rvemu.softfloat import calc_fclass, is_nan

assert calc_fclass(0xFF800000) == 0x001  # -infinity
assert is_nan(0x7FC00000)
```

```python
from rvemu.mpool import MemoryPool

with MemoryPool(4096, 64) as pool:
    chunk = pool.calloc()
    pool.free(chunk)
```

```python
from rvemu.riscv import Riscv, RiscvIO, Reg

core = Riscv(RiscvIO(), userdata=None, output_exit_code=True)
core.set_reg(Reg.a0, 42)
assert core.get_reg(Reg.a0) == 42
assert core.get_reg(Reg.zero) == 0
assert core.get_reg(Reg.sp) == 0xFFFFF000
```

## What this package does not do

It holds the hart's state and supporting data structures only. It does not
decode or execute instructions, load ELF files, handle system calls, model
guest memory, draw frames or offer a debugger, and it has no command-line
program. The callbacks in `RiscvIO` are stored but never called by the
package itself.
# timelane/util/console.py
from __future__ import annotations
import sys
from typing import Any

def eprint(*args: Any) -> None:
    print(*args, file=sys.stderr)


def die(prog: str, msg: str, rc: int = 2) -> int:
    eprint(f"[{prog}] ERROR: {msg}")
    return rc


def warn(prog: str, msg: str) -> None:
    eprint(f"[{prog}] WARN: {msg}")

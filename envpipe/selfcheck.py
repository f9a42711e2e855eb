from __future__ import annotations

import importlib
from dataclasses import dataclass
from fractions import Fraction

from .env import env_from
from .pipeline.engine import run_pipeline
from .pipeline.steps import input_step, intermediate_step, nop_step, output_step


@input_step
def load_value(val):
    return {"var1": val}


@intermediate_step
def add_one(var1):
    var2 = var1 + 1
    return env_from(locals(), "var2")


@output_step
def product(var1, var2):
    return var1 * var2


@output_step
def quotient(var1, var2):
    return Fraction(var1, var2)


@dataclass
class CheckRow:
    name: str
    ok: bool
    detail: str


@dataclass
class SelfCheckReport:
    rows: list[CheckRow]

    @property
    def ok(self) -> bool:
        return all(row.ok for row in self.rows)

    def to_text(self) -> str:
        lines: list[str] = []
        for row in self.rows:
            status = "OK" if row.ok else "FAIL"
            lines.append(f"[{status}] {row.name}: {row.detail}")
        lines.append(f"overall: {'OK' if self.ok else 'FAIL'}")
        return "\n".join(lines)


def run_selfcheck(*, smoke: bool = True) -> SelfCheckReport:
    rows: list[CheckRow] = []

    for module_name in ("yaml",):
        try:
            mod = importlib.import_module(module_name)
            version = getattr(mod, "__version__", "unknown")
            rows.append(CheckRow(module_name, True, f"version={version}"))
        except Exception as exc:
            rows.append(CheckRow(module_name, False, str(exc)))

    if smoke:
        cases = [
            ("smoke product", [load_value, add_one, product], 650),
            ("smoke fork", [load_value, add_one, nop_step, quotient], Fraction(25, 26)),
        ]
        for name, steps, expected in cases:
            try:
                result = run_pipeline([25], steps)
            except Exception as exc:
                rows.append(CheckRow(name, False, f"{type(exc).__name__}: {exc}"))
                continue
            rows.append(CheckRow(name, result == expected, f"result={result}, expected={expected}"))

    return SelfCheckReport(rows=rows)

# © 2014 jano <janoh@ksp.sk>
# © 2022 fezjo
"""
Basic behaviour you need to understand if you want to use this.

The solver is a pre-compiled program (by default `spare/m.exe`) which reads one
input file and writes its results into a directory next to it.

Files of one run -- every run gets a fresh identifier <id>.
  input_<id>.txt   -- configuration in the line protocol, one value per line:
                      field count, field values, field velocities,
                      initial time, time step, kstar, cq, potential type,
                      parameter count, parameters, potential expression.
  output_<id>/     -- created before the solver starts, filled by the solver.
                      Everything inside is reported as relative paths.

Solver lookup      -- relative to the current directory, first existing wins.
  ../spare/m.exe   -- running from a sibling of spare/, e.g. backend/
  ./spare/m.exe    -- running from the project root
  <parent>/spare/m.exe
                   -- running from a directory named backend
  If nothing exists, the first candidate is reported in the error message.

The solver is rebuilt outside of this tool, see `Config.recompile_cmd`.
"""

from datetime import timedelta
from typing import Optional


def short_id(execution_id: str, length: int = 8) -> str:
    return execution_id[:length] + "..."


def format_seconds(t: timedelta) -> str:
    return f"{t.total_seconds():g}"


class Config:
    timeout: timedelta = timedelta(seconds=600)
    quiet: bool = False
    solver: Optional[str] = None
    solver_dir: str = "spare"
    solver_name: str = "m.exe"
    solver_source: str = "gravitationalwaves.f"
    backend_dir: str = "backend"
    fortran_compiler: str = "gfortran"

    @staticmethod
    def recompile_cmd() -> str:
        return (
            f"cd {Config.solver_dir} && "
            f"{Config.fortran_compiler} {Config.solver_source} -o {Config.solver_name}"
        )

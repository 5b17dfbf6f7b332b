# © 2023 fezjo
import os
import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class ExecutionContext:
    execution_id: str
    executable: str
    workdir: str
    input_file: str
    output_dir: str


def new_execution_id() -> str:
    return str(uuid.uuid4())


def allocate_context(executable: str) -> ExecutionContext:
    """
    Mint a fresh identifier and derive the paths of one run.
    Nothing is created on disk.
    """
    execution_id = new_execution_id()
    workdir = os.path.dirname(executable)
    return ExecutionContext(
        execution_id=execution_id,
        executable=executable,
        workdir=workdir,
        input_file=os.path.join(workdir, f"input_{execution_id}.txt"),
        output_dir=os.path.join(workdir, f"output_{execution_id}"),
    )

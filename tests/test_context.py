import os

from cosmo_runner.common.context import allocate_context


def test_paths_are_derived_from_the_identifier(tmp_path):
    exe = str(tmp_path / "spare" / "m.exe")
    context = allocate_context(exe)

    workdir = str(tmp_path / "spare")
    assert context.executable == exe
    assert context.workdir == workdir
    assert context.input_file == os.path.join(
        workdir, f"input_{context.execution_id}.txt"
    )
    assert context.output_dir == os.path.join(workdir, f"output_{context.execution_id}")


def test_allocation_touches_nothing_on_disk(tmp_path):
    allocate_context(str(tmp_path / "m.exe"))
    assert list(tmp_path.iterdir()) == []


def test_identifiers_are_never_reused(tmp_path):
    exe = str(tmp_path / "m.exe")
    ids = {allocate_context(exe).execution_id for _ in range(2000)}
    assert len(ids) == 2000

# © 2014 jano <janoh@ksp.sk>
# © 2022 fezjo
import os

from cosmo_runner.common.configuration import Configuration

DEFAULT_POTENTIAL_TYPE = "tanh"


def format_number(value: float) -> str:
    # shortest round-trip repr, never locale dependent
    return repr(float(value))


def render_input_lines(conf: Configuration) -> list[str]:
    lines = [str(conf.num_fields)]
    lines += [format_number(v) for v in conf.field_values]
    lines += [format_number(v) for v in conf.field_velocities]
    lines += [
        format_number(conf.initial_time),
        format_number(conf.time_step),
        format_number(conf.kstar),
        format_number(conf.cq),
        conf.potential_type or DEFAULT_POTENTIAL_TYPE,
    ]
    parameters = conf.potential_parameters or ()
    lines.append(str(len(parameters)))
    lines += [format_number(p) for p in parameters]
    lines.append(conf.potential_expression or "")
    return lines


def write_input_file(path: str, conf: Configuration) -> None:
    """A failed write never leaves a partial file behind."""
    text = "".join(line + "\n" for line in render_input_lines(conf))
    try:
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
    except OSError:
        if os.path.isfile(path):
            os.remove(path)
        raise

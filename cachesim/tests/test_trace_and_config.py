import pytest

from cachesim.core.errors import ConfigurationError, TraceFormatError
from cachesim.simulation.config import SimulationConfig
from cachesim.simulation.trace import TraceRecord, parse_line, parse_lines, read_trace


def test_parse_lines_yields_records_and_skips_blank_lines():
    records = list(parse_lines(["r 00000000", "", "w 7fff0010", "   ", "r 1F", "w +ff"]))
    assert records == [
        TraceRecord('r', 0x0),
        TraceRecord('w', 0x7FFF0010),
        TraceRecord('r', 0x1F),
        TraceRecord('w', 0xFF),
    ]


def test_parse_lines_is_lazy():
    def lines():
        yield "r 10"
        raise AssertionError("read past the first record")

    it = parse_lines(lines())
    assert next(it) == ('r', 0x10)


@pytest.mark.parametrize('line,fragment', [
    ("x 0000", "unknown operation"),
    ("R 0000", "unknown operation"),
    ("read 0000", "unknown operation"),
    ("r zz", "invalid hex address"),
    ("r 0x1f", "invalid hex address"),
    ("r 1_f", "invalid hex address"),
    ("r ١٠", "invalid hex address"),
    ("r -10", "invalid hex address"),
    ("r", "expected"),
    ("r 10 20", "expected"),
    ("w 100000000", "32 bits"),
])
def test_malformed_records_raise(line, fragment):
    with pytest.raises(TraceFormatError) as exc:
        parse_line(line, line_no=3)
    assert fragment in str(exc.value)
    assert exc.value.line_no == 3
    assert str(exc.value).startswith("line 3:")


def test_error_reports_line_number_in_file(write_trace):
    path = write_trace(["r 0", "w 4", "q 8"])
    records = read_trace(path)
    assert next(records) == ('r', 0)
    assert next(records) == ('w', 4)
    with pytest.raises(TraceFormatError) as exc:
        next(records)
    assert exc.value.line_no == 3


def test_config_from_strings():
    cfg = SimulationConfig.from_strings("32", "1024", "2", "0", "0", "trace.txt")
    assert cfg == SimulationConfig(32, 1024, 2, 0, 0, "trace.txt")
    assert cfg.has_l2 is False
    assert SimulationConfig.from_strings("32", "1024", "2", "8192", "4", "t").has_l2 is True


@pytest.mark.parametrize('args', [
    ("abc", "1024", "2", "0", "0"),
    ("32", "-1024", "2", "0", "0"),
    ("32", "1024", "2.5", "0", "0"),
    ("0", "1024", "2", "0", "0"),
    ("32", "0", "2", "0", "0"),
    ("32", "1024", "0", "0", "0"),
    ("32", "1024", "2", "8192", "0"),
    ("32", "32", "2", "0", "0"),
    ("32", "1024", "2", "64", "4"),
])
def test_invalid_configs_raise(args):
    with pytest.raises(ConfigurationError):
        SimulationConfig.from_strings(*args, "trace.txt")


def test_l2_assoc_ignored_when_l2_absent():
    cfg = SimulationConfig(32, 1024, 2, 0, 8).validate()
    assert cfg.has_l2 is False


def test_validate_rejects_non_integers():
    with pytest.raises(ConfigurationError):
        SimulationConfig(32.0, 1024, 2).validate()
    with pytest.raises(ConfigurationError):
        SimulationConfig(True, 1024, 2).validate()

import io
import os
import subprocess
import sys

import pytest

from bond_analytics import cli
from bond_analytics.config import Settings


ALL_OPTIONS = [
    "--face-value", "1000",
    "--coupon-rate", "0.05",
    "--market-price", "950",
    "--years", "8",
    "--frequency", "2",
    "--required-yield", "0.06",
]


def test_main_with_options(capsys):
    assert cli.main(ALL_OPTIONS) == 0
    out = capsys.readouterr().out
    assert "Bond Analysis:" in out
    assert "Calculating required yield" not in out
    assert "Amortization Schedule:" in out


def test_main_prompts_on_stdin_and_derives_yield(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("1000\n0.05\n950\n8\n2\n-1\n"))
    assert cli.main([]) == 0
    out = capsys.readouterr().out
    assert "Enter Face Value" in out
    assert "Calculating required yield (YTM) based on the market price..." in out
    assert "Required Yield (derived from market price): " in out


def test_prompt_order_and_partial_options():
    args = cli.build_parser().parse_args(["--face-value", "500", "--years", "3"])
    asked = []
    answers = iter(["0.04", "480", "4", "0.05"])

    def fake_read(prompt):
        asked.append(prompt)
        return next(answers)

    values = cli.collect_inputs(args, read=fake_read)
    assert [p.split(" (")[0] for p in asked] == [
        "Enter Coupon Rate",
        "Enter Market Price",
        "Enter Payment Frequency",
        "Enter Required Yield",
    ]
    assert values == {
        "face_value": 500.0,
        "coupon_rate": 0.04,
        "market_price": 480.0,
        "years": 3,
        "frequency": 4,
        "required_yield": 0.05,
    }


def test_unparseable_input_exits():
    args = cli.build_parser().parse_args([])
    with pytest.raises(SystemExit) as exc:
        cli.collect_inputs(args, read=lambda prompt: "abc")
    assert "face value" in str(exc.value.code)


def test_invalid_terms_exit(capsys):
    opts = list(ALL_OPTIONS)
    opts[opts.index("--frequency") + 1] = "0"
    with pytest.raises(SystemExit) as exc:
        cli.main(opts)
    assert "payment_frequency" in str(exc.value.code)


def test_truncated_stdin_exits(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("1000\n0.05\n"))
    with pytest.raises(SystemExit):
        cli.main([])


def test_settings_defaults(monkeypatch):
    for key in ("BOND_YTM_TOLERANCE", "BOND_YTM_MAX_ITERATIONS", "BOND_BREAK_EVEN_WIDTH", "BOND_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    s = Settings()
    assert s.ytm_tolerance == 1e-6
    assert s.ytm_max_iterations == 1000
    assert s.break_even_width == 1e-6
    assert s.log_level == "WARNING"


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("BOND_YTM_TOLERANCE", "1e-9")
    monkeypatch.setenv("BOND_YTM_MAX_ITERATIONS", "250")
    monkeypatch.setenv("BOND_BREAK_EVEN_WIDTH", "not-a-number")
    monkeypatch.setenv("BOND_LOG_LEVEL", "debug")
    s = Settings()
    assert s.ytm_tolerance == 1e-9
    assert s.ytm_max_iterations == 250
    assert s.break_even_width == 1e-6, "bad values fall back to the default"
    assert s.log_level == "DEBUG"


def test_yield_below_frequency_floor_exits():
    opts = list(ALL_OPTIONS)
    opts[opts.index("--required-yield") + 1] = "-3"
    with pytest.raises(SystemExit) as exc:
        cli.main(opts)
    assert "payment_frequency" in str(exc.value.code)


def test_scenario_shift_below_frequency_floor_exits():
    # -0.995 is a valid yield at f=1 but the -1% sensitivity row lands on -1.005
    opts = list(ALL_OPTIONS)
    opts[opts.index("--frequency") + 1] = "1"
    opts[opts.index("--required-yield") + 1] = "-0.995"
    with pytest.raises(SystemExit) as exc:
        cli.main(opts)
    assert str(exc.value.code).startswith("Error: rate -1.005")


@pytest.mark.parametrize(
    "key, value, attr, expected",
    [
        ("BOND_LOG_LEVEL", "verbose", "log_level", "WARNING"),
        ("BOND_YTM_MAX_ITERATIONS", "0", "ytm_max_iterations", 1000),
        ("BOND_YTM_MAX_ITERATIONS", "-5", "ytm_max_iterations", 1000),
        ("BOND_YTM_TOLERANCE", "0", "ytm_tolerance", 1e-6),
        ("BOND_BREAK_EVEN_WIDTH", "-1e-3", "break_even_width", 1e-6),
    ],
)
def test_settings_reject_unusable_values(monkeypatch, key, value, attr, expected):
    monkeypatch.setenv(key, value)
    assert getattr(Settings(), attr) == expected


@pytest.mark.parametrize(
    "key, value",
    [("BOND_LOG_LEVEL", "verbose"), ("BOND_YTM_MAX_ITERATIONS", "0")],
)
def test_console_survives_unusable_settings(key, value):
    # fresh interpreter: pytest's root handlers would turn basicConfig into a no-op
    env = dict(os.environ, **{key: value})
    proc = subprocess.run(
        [sys.executable, "-m", "bond_analytics", *ALL_OPTIONS],
        env=env,
        capture_output=True,
        text=True,
    )
    assert proc.returncode == 0, proc.stderr
    assert "Bond Analysis:" in proc.stdout
